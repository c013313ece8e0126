"""OpenID Connect relying-party client."""

__version__ = "0.1.0"
