"""depmirror: redirect dependency fetches to mirror repositories."""

__version__ = "0.1.0"
