"""Small formatting and arithmetic helpers."""
import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def format_time(seconds: int) -> str:
    seconds = max(0, int(seconds))
    mins = seconds // 60
    secs = seconds % 60
    return f"{mins}:{secs:02d}"


def percent(part: int, whole: int) -> int:
    if whole == 0:
        return 0
    return round_half_up(part / whole * 100)
