"""Utility modules for cmdpal.

- logging_utils: File-based logging that stays out of the TUI's way
"""
