"""Launch applications and move their windows to configured positions."""

__version__ = "1.0.0"
