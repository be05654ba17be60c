"""Tools to create, mount, inspect and dump blocks of a small floppy disk image file system."""

__version__ = "0.1.0"
__all__ = ["cli", "disk", "layout", "tempinit", "util"]