#!/usr/bin/env python
"""
MedScan GUI Application Entry Point.

Development launcher; the installed package provides the ``medscan-ui``
command instead.
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent.parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from medscan_ui.app import main  # noqa: E402


if __name__ == "__main__":
    sys.exit(main())
