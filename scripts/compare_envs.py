#!/usr/bin/env python3
"""
Report configuration differences between pt and prod at one revision.

Usage: python scripts/compare_envs.py <tag> [filter]

filter defaults to "true", which ignores values that differ only by their
environment prefix (pt-/prod-/prd-). Any other value reports them too.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config_drift.cli import compare_envs_main


if __name__ == '__main__':
    sys.exit(compare_envs_main())
