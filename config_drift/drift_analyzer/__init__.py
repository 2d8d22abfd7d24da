"""
Drift Analyzer Module
Key-level drift between property files, with optional suppression of
environment-label substitutions.
"""

from .diff_engine import compute_diffs
from .normalizer import NORMALIZATION_RULES, Role, normalize_value

__all__ = [
    'compute_diffs',
    'normalize_value',
    'Role',
    'NORMALIZATION_RULES',
]
