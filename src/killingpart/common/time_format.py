import math


def _normalized_seconds(seconds: float) -> int:
    return max(math.floor(seconds), 0)


def seconds_string(seconds: float) -> str:
    return str(_normalized_seconds(seconds))


def minute_second_text(seconds: float) -> str:
    minutes, remaining = divmod(_normalized_seconds(seconds), 60)
    return f"{minutes}:{remaining:02d}"


def parse_seconds(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        parsed = float(value.strip())
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None
