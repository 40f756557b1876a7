import datetime
import re

_DURATION_UNITS = {
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}

_DURATION_PART_RE = re.compile(r"(\d+)([smhdw])")


def parse_duration(text):
    """Parse durations like "90s", "30m", "1h30m" or "7d".

    A bare integer is taken as a number of seconds and may be negative.
    """
    text = text.strip()
    if re.fullmatch(r"-?\d+", text):
        return datetime.timedelta(seconds=int(text))

    sign = 1
    if text.startswith("-"):
        sign = -1
        text = text[1:]

    if not text or not re.fullmatch(r"(\d+[smhdw])+", text):
        raise ValueError("Could not parse duration: {!r}".format(text))

    total = datetime.timedelta()
    for count, unit in _DURATION_PART_RE.findall(text):
        total += datetime.timedelta(**{_DURATION_UNITS[unit]: int(count)})
    return sign * total


def format_duration(value):
    seconds = int(value.total_seconds())
    if seconds % 86400 == 0 and seconds != 0:
        return "{}d".format(seconds // 86400)
    if seconds % 3600 == 0 and seconds != 0:
        return "{}h".format(seconds // 3600)
    return "{}s".format(seconds)
