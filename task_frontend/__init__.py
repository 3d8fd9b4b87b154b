"""Server-rendered front end for the remote task API."""

__version__ = "1.0.0"
