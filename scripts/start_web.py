#!/usr/bin/env python3
"""
Start the Study Tracker web dashboard.
Usage: python scripts/start_web.py [--port PORT] [--dev] [--host HOST]
"""

import sys
from pathlib import Path

# Allow running from a source checkout without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from studytracker.app import main  # noqa: E402

if __name__ == "__main__":
    main()
