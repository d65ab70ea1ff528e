"""taskkeeper: a small single-user task tracker with a local key-value store."""

__version__ = "0.1.0"
