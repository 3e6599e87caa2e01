#!/usr/bin/env python3
"""Mouse Jiggler - Main Entry Point

Simple wrapper to run the jiggler from the project root without installing.
"""

import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

# Import and run main
from jiggler.main import main

if __name__ == "__main__":
    sys.exit(main())
