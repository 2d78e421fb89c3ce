"""Install, update and launch the Spellborn game client from a file server."""

__version__ = "0.1.0"