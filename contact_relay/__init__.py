"""Contact form relay for the portfolio site."""

__version__ = "1.0.0"
