from datetime import datetime


def get_human_timestamp(format: str = "%Y-%m-%d %H:%M:%S") -> str:
    return datetime.now().replace(microsecond=0).strftime(format)
