"""Terminal client for Space Station 14 server status endpoints."""

__version__ = "0.1.0"
