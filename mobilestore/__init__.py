"""Local device registry: persists device identity and lists saved devices."""

__version__ = "0.1.0"
