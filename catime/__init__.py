"""Timer application support: window settings, toast animation, tray text, logging and update checks."""

__version__ = "1.0.0"