import logging

import pytest

PROC_NET_DEV_HEADER = """Inter-|   Receive                                                |  Transmit
 face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed
"""


def net_dev_line(interface: str, r_bytes: object, t_bytes: object) -> str:
    return (
        f"{interface:>6}: {r_bytes} 10 0 0 0 0 0 0 {t_bytes} 20 0 0 0 0 0 0\n"
    )


@pytest.fixture
def write_net_dev(tmp_path):
    source = tmp_path / "dev"

    def write(*lines: str):
        source.write_text(PROC_NET_DEV_HEADER + "".join(lines), encoding="utf-8")
        return source

    return write


@pytest.fixture(autouse=True)
def cache_home(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    return tmp_path / "cache"


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger("netspeed")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
