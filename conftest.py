# conftest.py: root-level pytest configuration
import sys
import os

# Ensure the project root is on sys.path so that
# ``import weighting`` / ``import config`` work without an editable install.
sys.path.insert(0, os.path.dirname(__file__))
