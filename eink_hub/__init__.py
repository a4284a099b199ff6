"""
eink-hub - registration, check-in and playlist service for e-Ink displays.
"""

__version__ = "0.1.0"
