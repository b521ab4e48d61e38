__title__ = "reqlite"
__description__ = "A minimal, synchronous HTTP client core for Python."
__version__ = "0.1.0"
