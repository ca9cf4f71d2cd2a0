"""
Pytest configuration: add project root to sys.path
so 'from fuel_mix.xxx import ...' works without installing.
"""
import sys
import os

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)
