"""A configurable chess variant with portals, custom pieces and a text console."""

__version__ = "0.1.0"

__all__ = ["__version__"]