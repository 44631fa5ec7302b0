"""respm - command line client for the research project management API."""

__version__ = "1.0.0"
