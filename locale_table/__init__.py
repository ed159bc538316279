"""Edit multi-language JSON translation catalogs as one key x language table."""

__version__ = "0.3.0"
