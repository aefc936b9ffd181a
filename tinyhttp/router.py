"""Route table: ordered prefix routes plus a root handler."""

from dataclasses import dataclass

from tinyhttp.exceptions import RouteTableFrozenError
from tinyhttp.http_constants import HTTPMethod, StandardRoute
from tinyhttp.http_request import HTTPRequest
from tinyhttp.http_response import HttpResponse
from tinyhttp.route_handler import RouteHandler


@dataclass(frozen=True)
class Route:
    method: HTTPMethod
    prefix: str
    handler: RouteHandler

    def matches(self, request: HTTPRequest) -> bool:
        return request.method == self.method and request.path.startswith(self.prefix)


class Router:
    """
    Route dispatcher over an ordered list of prefix routes.

    Matching is a linear scan in registration order and the first route
    whose method matches and whose prefix starts the path wins. Prefixes are
    compared as plain strings, so "/files" also matches "/filesx". The exact
    path "/" only ever goes to the root handler.

    The table is built before the server starts and frozen once it accepts
    connections; after that it is shared read-only by every connection task.
    """

    def __init__(self):
        """Initialize router with no routes and no root handler."""
        self._routes: tuple[Route, ...] = ()
        self._root_handler: RouteHandler | None = None
        self._frozen = False

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes

    @property
    def root_handler(self) -> RouteHandler | None:
        return self._root_handler

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, method: HTTPMethod, prefix: str, handler: RouteHandler) -> None:
        """
        Append a route; earlier registrations take precedence.

        Args:
            method: Verb the route answers to
            prefix: Literal path prefix (e.g., "/echo/")
            handler: Handler instance implementing RouteHandler protocol

        Raises:
            RouteTableFrozenError: If the table is already in use
        """
        self._check_not_frozen()
        self._routes = (*self._routes, Route(method, prefix, handler))

    def set_root_handler(self, handler: RouteHandler) -> None:
        """Set the handler for the exact path "/"."""
        self._check_not_frozen()
        self._root_handler = handler

    def freeze(self) -> None:
        self._frozen = True

    def match(self, request: HTTPRequest) -> RouteHandler | None:
        """
        Select the handler for a request.

        Args:
            request: Parsed HTTP request

        Returns:
            Matching handler, or None when nothing matches
        """
        if request.path == StandardRoute.ROOT.value:
            return self._root_handler

        route = next((r for r in self._routes if r.matches(request)), None)
        return route.handler if route is not None else None

    def dispatch(self, request: HTTPRequest) -> HttpResponse:
        """
        Dispatch request to appropriate handler.

        Args:
            request: Parsed HTTP request

        Returns:
            HTTP response from handler, or the standard 404 if nothing matches
        """
        handler = self.match(request)

        if handler is None:
            return HttpResponse.not_found()

        return handler.handle(request)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            raise RouteTableFrozenError("Routes can't change once the server is running")
