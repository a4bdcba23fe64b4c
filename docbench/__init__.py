"""docbench -- document intelligence workbench backend."""

__version__ = "0.1.0"
