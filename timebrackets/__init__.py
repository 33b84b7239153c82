"""
timebrackets - rank candidate meeting brackets by attendee overlap.
"""

__version__ = "0.1.0"
