"""keygate: time-limited API keys, user registration and admin key management."""

__version__ = "1.0.0"
