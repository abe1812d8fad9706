"""Forward identity lifecycle and admin events to an HTTP webhook."""

__version__ = "0.1.0"
