"""Random File Server - serves a random file from a directory on every request."""

__version__ = "0.1.0"
