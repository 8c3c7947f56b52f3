"""Version metadata for the KLUA front end."""

__version__ = "0.1.0"
