"""Line-level comparison of two document bodies.

This is a single forward pass with a bounded lookahead, not a minimal edit
script. Its output for ambiguous inputs is relied upon by history views, so
it must not be swapped for an LCS or Myers diff.
"""

from dataclasses import dataclass
from enum import StrEnum

LOOKAHEAD_WINDOW = 10


class DiffKind(StrEnum):
    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class DiffLine:
    kind: DiffKind
    text: str
    line_number_a: int | None = None
    line_number_b: int | None = None


@dataclass(frozen=True)
class DiffStats:
    added: int
    removed: int
    unchanged: int

    @property
    def total(self) -> int:
        return self.added + self.removed + self.unchanged


@dataclass(frozen=True)
class LineDiff:
    lines: list[DiffLine]
    stats: DiffStats


def split_lines(text: str) -> list[str]:
    return text.split("\n") if text else []


def _found_ahead(needle: str, lines: list[str], start: int) -> bool:
    end = min(start + LOOKAHEAD_WINDOW, len(lines))
    return any(lines[k] == needle for k in range(start + 1, end))


def line_diff(text_a: str, text_b: str) -> list[DiffLine]:
    a = split_lines(text_a)
    b = split_lines(text_b)
    result: list[DiffLine] = []
    i = j = 0

    while i < len(a) or j < len(b):
        if i >= len(a):
            result.append(DiffLine(DiffKind.ADDED, b[j], line_number_b=j + 1))
            j += 1
        elif j >= len(b):
            result.append(DiffLine(DiffKind.REMOVED, a[i], line_number_a=i + 1))
            i += 1
        elif a[i] == b[j]:
            result.append(DiffLine(DiffKind.UNCHANGED, a[i], i + 1, j + 1))
            i += 1
            j += 1
        elif _found_ahead(a[i], b, j):
            # a[i] reappears shortly in b, so b[j] was inserted
            result.append(DiffLine(DiffKind.ADDED, b[j], line_number_b=j + 1))
            j += 1
        elif _found_ahead(b[j], a, i):
            result.append(DiffLine(DiffKind.REMOVED, a[i], line_number_a=i + 1))
            i += 1
        else:
            result.append(DiffLine(DiffKind.REMOVED, a[i], line_number_a=i + 1))
            result.append(DiffLine(DiffKind.ADDED, b[j], line_number_b=j + 1))
            i += 1
            j += 1

    return result


def diff_stats(lines: list[DiffLine]) -> DiffStats:
    return DiffStats(
        added=sum(1 for line in lines if line.kind is DiffKind.ADDED),
        removed=sum(1 for line in lines if line.kind is DiffKind.REMOVED),
        unchanged=sum(1 for line in lines if line.kind is DiffKind.UNCHANGED),
    )


def compare_texts(text_a: str, text_b: str) -> LineDiff:
    lines = line_diff(text_a, text_b)
    return LineDiff(lines=lines, stats=diff_stats(lines))
