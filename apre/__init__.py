"""
APRE - sales and customer feedback reporting dashboard.
"""

__version__ = "1.0.0"
