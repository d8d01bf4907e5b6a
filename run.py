"""
Development runner: puts 'src' on sys.path and starts the app without installing it.

Usage:
    $ python run.py
"""
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))

from scatterexplorer.main import main  # noqa: E402

if __name__ == "__main__":
    main()
