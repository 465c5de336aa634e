"""Version information for indy-tool."""

__version__ = "1.0.0"
