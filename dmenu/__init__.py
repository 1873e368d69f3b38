"""A terminal dynamic menu for picking items from standard input, and a file-testing filter."""

__version__ = "5.2"