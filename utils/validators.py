import re

DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_valid_date(date_str: str) -> bool:
    return bool(DATE_KEY_RE.match(date_str))


def is_remote_source(location: str) -> bool:
    return location.startswith(("http://", "https://"))
