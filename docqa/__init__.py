"""Document question answering over uploaded files."""

__version__ = "0.1.0"
