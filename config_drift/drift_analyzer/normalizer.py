"""
Environment-label normalization for cross-environment comparison.

Values such as ``pt-orders-db`` and ``prod-orders-db`` differ only by the
environment prefix. Stripping the known labels lets the diff engine tell those
apart from real drift.
"""

from enum import Enum
from typing import Dict, Optional, Tuple


class Role(str, Enum):
    PT = "pt"
    PROD = "prod"


# Literal substrings, removed in order, every occurrence
NORMALIZATION_RULES: Dict[Role, Tuple[str, ...]] = {
    Role.PT: ("pt-", "contents-pt"),
    Role.PROD: ("prod-", "prd-", "contents"),
}


def normalize_value(value: Optional[str], role: Role) -> str:
    """
    Strip environment-identifying substrings from a value.

    Args:
        value: Raw property value (None is treated as empty)
        role: Which environment the value came from

    Returns:
        The normalized string; never None
    """
    if not value:
        return ""
    normalized = value
    for needle in NORMALIZATION_RULES[role]:
        normalized = normalized.replace(needle, "")
    return normalized
