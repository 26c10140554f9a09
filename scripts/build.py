#!/usr/bin/env python3
"""
Build an EPUB from a book directory.

Usage:
    python build.py wind                 Build manuscript/*wind*/ to output/
    python build.py wind --verbose       Show every registered section
    python build.py path/to/book --css custom.css

Requires: EbookLib, PyYAML (or `pip install -e .` and run `bookbinder`).
"""

import os
import sys
import traceback

# Ensure bookbinder is importable from the scripts/ directory
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from bookbinder.cli import main


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    except Exception as e:
        log_path = "build_error.log"
        with open(log_path, "w") as f:
            traceback.print_exc(file=f)
        print(f"\nUnexpected error: {e}")
        print(f"Full traceback written to {log_path}")
        sys.exit(1)
