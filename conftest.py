"""
Pytest configuration file for ingredient-translator tests.
"""

import sys
from pathlib import Path

# Make server.py and the api package importable without an install
root_path = Path(__file__).parent
sys.path.insert(0, str(root_path))
