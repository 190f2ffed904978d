"""
Converts the time cells found in task exports into decimal hours.

Exports mix several notations in the same column ("6h 8m", "2:30", "1,5",
"4"). Each notation has a matcher; the first matcher that accepts the text
decides the result. Nothing in here raises: a fragment that cannot be read
counts as zero.
"""
import re

_HOURS_SUFFIX = re.compile(r"(\d+)h")
_MINUTES_SUFFIX = re.compile(r"(\d+)m")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _leading_int(text: str) -> int:
    m = _LEADING_INT.match(text)
    return int(m.group(1)) if m else 0


def _leading_float(text: str) -> float:
    m = _LEADING_FLOAT.match(text)
    return float(m.group(1)) if m else 0.0


def _suffix_form(text: str):
    """'6h 8m', '8m', '3h'"""
    if "h" not in text and "m" not in text:
        return None
    h = _HOURS_SUFFIX.search(text)
    m = _MINUTES_SUFFIX.search(text)
    hours = int(h.group(1)) if h else 0
    minutes = int(m.group(1)) if m else 0
    return hours + minutes / 60


def _clock_form(text: str):
    """'2:30'"""
    if ":" not in text:
        return None
    left, right = text.split(":", 1)
    return _leading_int(left) + _leading_int(right) / 60


def _decimal_form(text: str):
    """'1.5', '1,5', '4'"""
    return _leading_float(text.replace(",", ".", 1))


MATCHERS = (_suffix_form, _clock_form, _decimal_form)


def parse_time_to_hours(raw) -> float:
    if raw is None:
        return 0.0
    text = str(raw).strip()
    if not text:
        return 0.0

    for matcher in MATCHERS:
        hours = matcher(text)
        if hours is not None:
            return float(hours)
    return 0.0
