"""A REST client with basic, bearer and per-realm OIDC token authentication."""

__version__ = "0.1.0"
__all__ = ["authorization", "client", "errors", "multi_realm"]