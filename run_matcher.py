#!/usr/bin/env python3
"""Entry point to fetch and rank jobs from the command line."""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from jobmatch.log import get_logger
from jobmatch.config import PROFILE_PATH

log = get_logger(__name__)


def _check_setup() -> bool:
    """Return True if the profile is missing."""
    if not PROFILE_PATH.exists():
        print()
        print(f"  No profile found at {PROFILE_PATH}.")
        print("  Create it with your name, location and skills before running.")
        print()
        return True
    return False


if __name__ == "__main__":
    if _check_setup():
        sys.exit(1)

    from jobmatch.cli import main

    sys.exit(main())
