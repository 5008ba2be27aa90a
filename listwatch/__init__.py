"""Change monitor for remote filter lists."""

__version__ = "0.1.0"
