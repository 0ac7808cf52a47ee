"""
Bloom - infant growth prediction and analysis.
"""

__version__ = "0.1.0"
