#!/usr/bin/env python3
"""
Generate security policy fixtures.

Usage:
    python scripts/generate_policies.py
    python scripts/generate_policies.py --numPolicies 10 --action ALLOW --when 3
"""

import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from authzgen.cli import main


if __name__ == "__main__":
    sys.exit(main())
