import math

from netspeed import glyphs
from netspeed.data.net_speed import SpeedPair

SPEED_UNITS = ["B/s", "K/s", "M/s", "G/s", "T/s", "P/s", "E/s", "Z/s", "Y/s"]


def valid_precisions() -> list[str]:
    """
    Return a list of valid display precisions.
    """
    return ["fixed", "adaptive"]


def pad_float(number: float = 0.0, places: int = 2) -> str:
    """
    Pad a float to the given number of decimal places.
    """
    return f"{number:.{places}f}"


def adaptive_places(number: float) -> int:
    """
    Pick the number of decimal places that keeps a scaled value short.
    """
    magnitude = abs(number)
    if magnitude >= 100 or magnitude < 0.01:
        return 0
    elif magnitude >= 10:
        return 1
    return 2


def format_speed(amount: float, precision: str = "fixed") -> str:
    """
    Scale a rate in bytes per second to the largest unit that keeps it under
    1000, e.g., 1500000 -> "1.50 M/s".
    """
    if precision not in valid_precisions():
        raise ValueError(f'invalid precision "{precision}"')

    unit_index = 0
    while amount >= 1000 and unit_index < len(SPEED_UNITS) - 1:
        amount /= 1000
        unit_index += 1

    if precision == "adaptive":
        places = adaptive_places(amount)
        # rounding can carry into the next band, e.g., 99.96 -> 100.0
        places = adaptive_places(round(amount, places))
        # avoid "-0" for negligible negative rates
        if math.isfinite(amount) and abs(amount) < 0.01:
            amount = 0.0
    else:
        places = 2

    return f"{pad_float(number=amount, places=places)} {SPEED_UNITS[unit_index]}"


def to_speed_string(speed: SpeedPair, precision: str = "fixed") -> str:
    return f"{glyphs.arrow_down} {format_speed(speed.down, precision=precision)} {glyphs.arrow_up} {format_speed(speed.up, precision=precision)}"
