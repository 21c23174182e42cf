"""
Entry Point Script (Bootstrap)
==============================
This script is the absolute starting point of the application for development.

Why is this file needed?
------------------------
1. It is located outside the 'src' package to act as a convenient runner.
2. It modifies 'sys.path' to ensure Python can resolve imports like
   'from edgebundling.model...' without installing the package.

Usage:
    $ python run.py [dataset.csv | dataset.json]
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from edgebundling.logging_config import setup_logging
from edgebundling.main import main

if __name__ == "__main__":
    setup_logging()
    main(sys.argv[1] if len(sys.argv) > 1 else None)
