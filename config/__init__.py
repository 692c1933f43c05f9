"""Environment-driven configuration for the lobby relay server."""
