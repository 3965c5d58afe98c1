"""
Sitesnap - capture web page screenshots through a hosted rendering API
"""

__version__ = "1.0.0"
