"""
Root conftest.py for toml-env.

Puts the project root on sys.path so the tests import the working tree.
"""

import os
import sys

project_root = os.path.dirname(os.path.abspath(__file__))
if project_root not in sys.path:
    sys.path.insert(0, project_root)
