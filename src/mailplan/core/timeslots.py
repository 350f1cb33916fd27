"""Workday clock arithmetic - no I/O dependencies."""

WORKDAY_START_HOUR = 9
MINUTES_PER_DAY = 24 * 60


def calculate_start_time(hours_elapsed: float) -> str:
    """
    Clock time after `hours_elapsed` hours of work, starting at 09:00.

    Fractional hours are converted to minutes and truncated. Wraps past
    midnight like a wall clock.
    """
    # round() first so float noise (e.g. 0.7 * 60) doesn't lose a minute
    minutes = WORKDAY_START_HOUR * 60 + int(round(hours_elapsed * 60, 6))
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
