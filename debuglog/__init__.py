"""Local debug log sink + live browser viewer."""

__version__ = "0.1.0"
