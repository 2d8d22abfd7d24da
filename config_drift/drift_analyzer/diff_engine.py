"""
Key-level diff between two parsed property files.
"""

import logging
from typing import List, Optional

from ..models import ChangeKind, ChangeRecord, PropertyMap
from .normalizer import Role, normalize_value

logger = logging.getLogger(__name__)


def _classify(left_val: Optional[str], right_val: Optional[str]) -> ChangeKind:
    if left_val is None:
        return ChangeKind.ADDED
    if right_val is None:
        return ChangeKind.REMOVED
    return ChangeKind.CHANGED


def _is_label_substitution(left_val: str, right_val: str) -> Optional[str]:
    """Return the shared normalized value when two values differ only by environment labels."""
    normalized_left = normalize_value(left_val, Role.PT)
    normalized_right = normalize_value(right_val, Role.PROD)
    if normalized_left and normalized_left == normalized_right:
        return normalized_left
    return None


def compute_diffs(
    left: Optional[PropertyMap],
    right: Optional[PropertyMap],
    suppress_normalized: bool = False,
) -> List[ChangeRecord]:
    """
    Reconcile two property maps into change records.

    Keys are visited in left-file order, then right-only keys in right-file
    order, so identical inputs always yield identical output.

    Args:
        left: Old (or pt) side; None when the file is absent
        right: New (or prod) side; None when the file is absent
        suppress_normalized: Drop "changed" records whose values are equal once
            environment labels are stripped (cross-environment use only)

    Returns:
        Records for every key whose values disagree, minus suppressed ones
    """
    left = left or {}
    right = right or {}
    all_keys = dict.fromkeys([*left, *right])

    records: List[ChangeRecord] = []
    ignored: List[str] = []

    for key in all_keys:
        left_val = left.get(key)
        right_val = right.get(key)
        if left_val == right_val:
            continue

        kind = _classify(left_val, right_val)
        if suppress_normalized and kind is ChangeKind.CHANGED and left_val and right_val:
            normalized = _is_label_substitution(left_val, right_val)
            if normalized is not None:
                logger.debug(f"Skipping diff: {key} (pt: {left_val}, prod: {right_val}, normalized: {normalized})")
                ignored.append(key)
                continue

        records.append(ChangeRecord(key=key, left=left_val, right=right_val, kind=kind))

    if suppress_normalized:
        if ignored:
            logger.info(f"Filtered {len(ignored)} keys: {', '.join(ignored)}")
        else:
            logger.debug("No keys filtered")

    return records
