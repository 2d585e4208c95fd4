"""
Athos Explorer adaptive learning backend
"""

__version__ = "1.0.0"
