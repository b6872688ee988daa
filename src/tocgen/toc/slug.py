import re

_SEPARATORS = re.compile(r"[\s.]+")


def slugify(title: str) -> str:
    """Collapse every run of whitespace or periods in a heading title into one hyphen."""
    return _SEPARATORS.sub("-", title)
