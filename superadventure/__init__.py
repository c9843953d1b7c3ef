"""Super Adventure: a side-scrolling platformer built on pygame."""

__version__ = "1.0.0"
