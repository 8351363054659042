"""Identity normalization for group labels and person names.

Responsibilities of this stage:
- reduce a group label to its primary leader (the group key)
- derive lowercase name keys for the fallback match of unidentified roster rows
- stay free of side effects

Group keys are case-sensitive on purpose: both sources spell leader names the same
way, and folding case would hide a genuine rename.
"""

from __future__ import annotations

import unicodedata


def normalize_group_key(label: str | None, *, delimiter: str = "&") -> str:
    """Return the trimmed primary-leader part of ``label``.

    ``"Jane Doe & John Roe"`` and ``"Jane Doe"`` share the key ``"Jane Doe"``.
    """

    if not label:
        return ""
    leader, _, _co_leader = label.strip().partition(delimiter)
    return leader.strip()


def normalize_full_name(first_name: str | None, last_name: str | None) -> str:
    """Lowercase, whitespace-collapsed ``"first last"``; used for fallback matching only."""

    text = f"{first_name or ''} {last_name or ''}"
    text = unicodedata.normalize("NFKC", text).casefold()
    return " ".join(text.split())


def name_keys(
    first_name: str | None,
    last_name: str | None,
    *,
    nickname: str | None = None,
) -> tuple[str, ...]:
    """Fallback keys for a person, legal name first, then nickname."""

    keys: list[str] = []
    for given in (first_name, nickname):
        key = normalize_full_name(given, last_name)
        if given and given.strip() and key and key not in keys:
            keys.append(key)
    return tuple(keys)
