"""
cmdpal - keyboard-driven command palette engine
"""

__version__ = "0.3.0"
