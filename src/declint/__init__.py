"""declint - duplicate property linter for CSS declaration blocks."""

__version__ = "0.1.0"
