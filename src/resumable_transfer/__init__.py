"""Transfer endpoint abstraction and checkpoint persistence."""

__version__ = "0.1.0"

__all__ = ["__version__"]
