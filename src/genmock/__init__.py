"""genmock - generate call-recording mocks for Go interfaces."""

__version__ = "0.1.0"
