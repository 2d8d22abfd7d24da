#!/usr/bin/env python3
"""
Report configuration changes between two revisions of every environment.

Usage: python scripts/check_config.py <oldTag> <newTag>

Set CLOUD_CONFIG_PATH to point at the cloud-config working copy.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config_drift.cli import check_config_main


if __name__ == '__main__':
    sys.exit(check_config_main())
