"""Desktop activity tracking: processes, focused windows, idle time and session reporting."""

__version__ = "0.1.0"
__all__ = ["__version__"]