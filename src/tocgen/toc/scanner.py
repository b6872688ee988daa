import re
from dataclasses import dataclass
from typing import Iterator

MAX_DEPTH = 6


@dataclass(frozen=True)
class HeadingToken:
    depth: int
    raw_title: str


def validate_marker(marker: str) -> str:
    if len(marker) != 1 or marker.isspace():
        raise ValueError(f"Heading marker must be a single non-space character, got {marker!r}")
    return marker


class HeadingScanner:
    """Yields a HeadingToken for every heading line of a document, in order.

    A heading is up to two characters of indentation, 1-6 marker characters,
    one whitespace character and the rest of the line as the title. Each
    iteration starts again from the first line.
    """

    def __init__(self, text: str, marker: str = "#"):
        self.text = text
        self.marker = validate_marker(marker)
        self.pattern = re.compile(rf"^\s{{0,2}}({re.escape(marker)}{{1,{MAX_DEPTH}}})\s(.*)$")

    def __iter__(self) -> Iterator[HeadingToken]:
        for line in self.text.split("\n"):
            if line.endswith("\r"):
                line = line[:-1]

            match = self.pattern.match(line)
            if match:
                yield HeadingToken(depth=len(match.group(1)), raw_title=match.group(2))


def scan_headings(text: str, marker: str = "#") -> Iterator[HeadingToken]:
    return iter(HeadingScanner(text, marker=marker))
