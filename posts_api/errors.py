"""
Exception hierarchy for the posts service.

Configuration and connectivity errors are fatal at startup.
StoreError is raised per request and reported to the caller as HTTP 500.
"""


class PostsAPIError(Exception):
    """Base class for all service errors."""


class ConfigurationError(PostsAPIError):
    """Required configuration is missing or invalid."""


class DatabaseConnectionError(PostsAPIError):
    """The database could not be reached at startup."""


class StoreError(PostsAPIError):
    """A storage operation failed while serving a request."""
