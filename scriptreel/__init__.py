"""
scriptreel - AI narration scripts and talking-avatar videos.
"""

__version__ = "1.0.0"
