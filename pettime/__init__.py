"""
pettime - time handling for the pet-care marketplace: opening hours and task reminders.
"""

__version__ = "0.1.0"
