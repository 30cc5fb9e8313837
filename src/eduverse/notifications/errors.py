"""Exceptions raised by notification helpers."""


class NotificationError(Exception):
    """Base exception for notification preferences and planning."""


class PreferenceError(NotificationError):
    """Raised when stored preferences cannot be read or written."""
