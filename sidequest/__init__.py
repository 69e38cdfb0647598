"""
Sidequest: turn real life into an RPG

Progression engine (XP, levels, streaks) and quest lifecycle services.
"""

__version__ = "1.0.0"
