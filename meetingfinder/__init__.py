"""
meetingfinder - find free meeting slots in a day's agenda.
"""

__version__ = "0.1.0"
