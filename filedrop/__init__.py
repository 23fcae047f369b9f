"""filedrop: single-file HTTP upload service backed by a local directory."""

__version__ = "0.1.0"
