"""Delete every message a Discord account has authored."""

__version__ = "0.1.0"
