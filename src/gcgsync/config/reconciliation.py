"""Reconciliation policy built from environment overrides."""

from __future__ import annotations

from gcgsync.domain.reconciliation.policy import ReconciliationPolicy

from .env import env_list
from .errors import ConfigurationError

ADMIN_CATEGORIES_ENV = "GCGSYNC_ADMIN_CATEGORIES"
INACTIVE_KEYWORDS_ENV = "GCGSYNC_INACTIVE_KEYWORDS"


def get_reconciliation_policy() -> ReconciliationPolicy:
    """Default policy, with category and keyword lists overridable from the environment."""

    overrides: dict[str, tuple[str, ...]] = {}
    categories = env_list(ADMIN_CATEGORIES_ENV)
    if categories is not None:
        overrides["administrative_categories"] = categories
    keywords = env_list(INACTIVE_KEYWORDS_ENV)
    if keywords is not None:
        overrides["inactive_keywords"] = tuple(keyword.lower() for keyword in keywords)

    try:
        return ReconciliationPolicy(**overrides)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid reconciliation policy: {exc}") from exc
