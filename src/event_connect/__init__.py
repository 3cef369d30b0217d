# ABOUTME: Main package initialization for the event-connect networking tool.
# ABOUTME: Exports version information from the installed distribution metadata.

from importlib.metadata import version

__version__ = version("event-connect")
