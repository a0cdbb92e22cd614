"""Step a display backlight and report it with a self-replacing notification."""

__version__ = "0.3.0"
