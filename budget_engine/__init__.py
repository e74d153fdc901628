"""
Budget Calculation Engine

Pure financial and project calculations exposed through a thin calculator API.
"""

__version__ = "0.1.0"
