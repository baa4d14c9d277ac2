"""ZenCloud: a small file-storage HTTP service."""

__version__ = "1.0.0"
