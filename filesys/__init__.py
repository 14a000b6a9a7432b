"""A simulated in-memory file system with open handles, a line editor and an interactive command shell."""

__version__ = "0.1.0"