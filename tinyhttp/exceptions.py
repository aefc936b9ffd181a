"""Server-specific exceptions for better error handling."""


class HTTPServerError(Exception):
    """Base exception for HTTP server errors."""

    pass


class RouteTableFrozenError(HTTPServerError):
    """Raised when a route is registered after the server started accepting."""

    pass


class FileSecurityError(HTTPServerError):
    """Raised when a file name would resolve outside the serving directory."""

    pass
