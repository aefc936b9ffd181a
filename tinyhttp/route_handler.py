"""Route handlers using protocol pattern for extensibility."""

from http import HTTPStatus
from logging import Logger
from typing import Protocol

import tinyhttp.http_constants as constants
from tinyhttp.file_manager import FileManager
from tinyhttp.http_request import HTTPRequest
from tinyhttp.http_response import HttpResponse


class RouteHandler(Protocol):
    """Protocol for route handlers (structural subtyping)."""

    def handle(self, request: HTTPRequest) -> HttpResponse:
        """
        Handle HTTP request and return response.

        Args:
            request: Parsed HTTP request

        Returns:
            HTTP response to send to client
        """
        ...


def strip_prefix(path: str, prefix: str) -> str:
    """Remainder of path after prefix, or "" if path doesn't start with it."""
    return path[len(prefix):] if path.startswith(prefix) else ""


class RootHandler:
    """Handler for root path '/'."""

    def handle(self, request: HTTPRequest) -> HttpResponse:
        """Return 200 with empty status text, no headers and empty body."""
        return HttpResponse(HTTPStatus.OK.value, "", [], "")


class EchoHandler:
    """Handler for /echo/<text> - echoes back the text."""

    def __init__(self, prefix: str = constants.StandardRoute.ECHO.value):
        self.prefix = prefix

    def handle(self, request: HTTPRequest) -> HttpResponse:
        """Echo the path remainder as text/plain."""
        text = strip_prefix(request.path, self.prefix)
        return HttpResponse.with_content(text, constants.ContentType.TEXT_PLAIN.value)


class UserAgentHandler:
    """Handler for /user-agent - returns User-Agent header."""

    def handle(self, request: HTTPRequest) -> HttpResponse:
        """Return the User-Agent header value, or "Unknown"."""
        user_agent = request.get_header(constants.HTTPHeaders.USER_AGENT.value)
        if user_agent is None:
            user_agent = constants.UNKNOWN_USER_AGENT
        return HttpResponse.with_content(
            user_agent, constants.ContentType.TEXT_PLAIN.value
        )


class FileReadHandler:
    """Handler for GET /files/<filename> - serves a file from the listing."""

    def __init__(
        self,
        file_manager: FileManager,
        logger: Logger,
        prefix: str = constants.StandardRoute.FILES.value,
    ):
        """
        Initialize FileReadHandler with a FileManager.

        Args:
            file_manager: Serving directory and startup file listing
            logger: Logger instance for read failures
            prefix: Path prefix stripped to obtain the file name
        """
        self.file_manager = file_manager
        self.logger = logger
        self.prefix = prefix

    def handle(self, request: HTTPRequest) -> HttpResponse:
        """
        Serve the named file as application/octet-stream.

        A file that is listed but can't be read is served with an empty body
        instead of an error status.

        Args:
            request: HTTP request with the file name after the prefix

        Returns:
            200 with file content, or 404 if no file matches the name
        """
        filename = strip_prefix(request.path, self.prefix)
        path = self.file_manager.find(filename)
        if path is None:
            return HttpResponse.not_found()

        try:
            content = self.file_manager.read_file(path)
        except OSError as e:
            self.logger.warning(f"Could not read {path}: {e}")
            content = b""

        return HttpResponse.with_content(
            content, constants.ContentType.OCTET_STREAM.value
        )


class FileWriteHandler:
    """Handler for POST /files/<filename> - stores the request body."""

    def __init__(
        self,
        file_manager: FileManager,
        prefix: str = constants.StandardRoute.FILES.value,
    ):
        self.file_manager = file_manager
        self.prefix = prefix

    def handle(self, request: HTTPRequest) -> HttpResponse:
        """
        Write the body verbatim to the serving directory, overwriting.

        Failures are not turned into a response: FileSecurityError and
        OSError propagate to the connection handler, which drops the
        connection.

        Args:
            request: HTTP request with the file name after the prefix

        Returns:
            201 with empty body
        """
        filename = strip_prefix(request.path, self.prefix)
        self.file_manager.write_file(filename, request.body.encode("utf-8"))
        return HttpResponse(HTTPStatus.CREATED.value, "", [], "")
