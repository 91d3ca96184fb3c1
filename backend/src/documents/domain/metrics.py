import re
from dataclasses import dataclass

_MARKUP = re.compile(r"<[^>]*>")


@dataclass(frozen=True)
class ContentMetrics:
    size: int
    word_count: int
    character_count: int


def strip_markup(content: str) -> str:
    return _MARKUP.sub("", content)


def compute_metrics(content: str) -> ContentMetrics:
    return ContentMetrics(
        size=len(content.encode("utf-8")),
        word_count=len(strip_markup(content).split()),
        character_count=len(content),
    )
