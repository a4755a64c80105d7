"""logpretty — colorize and reorder JSON log lines read from stdin."""

__version__ = "0.1.0"
