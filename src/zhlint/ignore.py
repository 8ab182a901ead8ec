"""Case ignores: text patterns whose validations are suppressed.

A case-ignore pattern names a stretch of the original text that must stay
as written. The format is::

    [prefix-,]textStart[,textEnd][,-suffix]

``prefix`` and ``suffix`` only anchor the match; the ignored range runs from
the start of ``textStart`` to the end of ``textEnd`` (or of ``textStart``
when there is no end part).

Example:
    >>> case = parse_ignored_case("vue-,test,-ing")
    >>> case.prefix, case.text_start, case.suffix
    ('vue', 'test', 'ing')
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class IgnoredCase:
    """A parsed case-ignore pattern."""

    text_start: str
    text_end: str = ""
    prefix: str = ""
    suffix: str = ""


@dataclass(frozen=True, slots=True)
class IgnoredRange:
    """Absolute ``[start, end)`` range of the original text to keep verbatim."""

    start: int
    end: int

    def covers(self, start: int, end: int) -> bool:
        return self.start <= start and end <= self.end


def parse_ignored_case(value: str) -> IgnoredCase | None:
    """Parse a case-ignore string.

    Args:
        value: Pattern in ``[prefix-,]textStart[,textEnd][,-suffix]`` form

    Returns:
        The parsed case, or None if the pattern is malformed
    """
    parts = [part.strip() for part in value.split(",")]
    prefix = ""
    suffix = ""
    if len(parts) > 1 and parts[0].endswith("-"):
        prefix = parts.pop(0)[:-1]
    if len(parts) > 1 and parts[-1].startswith("-"):
        suffix = parts.pop()[1:]
    if not 1 <= len(parts) <= 2 or not parts[0]:
        return None
    text_end = parts[1] if len(parts) == 2 else ""
    return IgnoredCase(
        text_start=parts[0], text_end=text_end, prefix=prefix, suffix=suffix
    )


def find_ignored_ranges(
    text: str, cases: Iterable[IgnoredCase]
) -> list[IgnoredRange]:
    """Locate every occurrence of every case in the original text."""
    ranges: list[IgnoredRange] = []
    for case in cases:
        ranges.extend(_find_case(text, case))
    ranges.sort(key=lambda r: (r.start, r.end))
    return ranges


def _find_case(text: str, case: IgnoredCase) -> Iterable[IgnoredRange]:
    head = case.prefix + case.text_start
    pos = 0
    while True:
        found = text.find(head, pos)
        if found < 0:
            return
        start = found + len(case.prefix)
        after = start + len(case.text_start)
        if case.text_end:
            tail = text.find(case.text_end + case.suffix, after)
            if tail < 0:
                return
            end = tail + len(case.text_end)
        elif case.suffix and not text.startswith(case.suffix, after):
            pos = found + 1
            continue
        else:
            end = after
        yield IgnoredRange(start, end)
        pos = max(end, found + 1)


def is_ignored(ranges: Sequence[IgnoredRange], start: int, end: int) -> bool:
    """Check whether ``[start, end)`` lies inside any ignored range."""
    return any(r.covers(start, end) for r in ranges)
