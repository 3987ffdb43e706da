"""
Utils module - Logging.

Contents:
- message.py: Log class for package logging
"""
