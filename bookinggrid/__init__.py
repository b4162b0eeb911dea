"""
bookinggrid - Weekly booking calendar grid and slot placement.
"""

__version__ = "0.1.0"
