"""Free-text inactivity classification of roster notes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .policy import DEFAULT_INACTIVE_KEYWORDS


@runtime_checkable
class InactivityClassifier(Protocol):
    def __call__(self, note: str | None) -> bool: ...


@dataclass(frozen=True, slots=True)
class KeywordInactivityClassifier:
    """Flags a note as inactive when it contains any keyword, case-insensitively.

    Matching is by substring, so "Inactive since 2023" and "moved away (TX)" both count.
    """

    keywords: tuple[str, ...] = DEFAULT_INACTIVE_KEYWORDS

    def __post_init__(self) -> None:
        folded = tuple(keyword.strip().casefold() for keyword in self.keywords)
        object.__setattr__(self, "keywords", tuple(keyword for keyword in folded if keyword))

    def matched_keyword(self, note: str | None) -> str | None:
        if not note:
            return None
        text = note.casefold()
        for keyword in self.keywords:
            if keyword in text:
                return keyword
        return None

    def __call__(self, note: str | None) -> bool:
        return self.matched_keyword(note) is not None


def is_inactive(note: str | None, *, keywords: tuple[str, ...] = DEFAULT_INACTIVE_KEYWORDS) -> bool:
    return KeywordInactivityClassifier(keywords)(note)
