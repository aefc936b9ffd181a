"""Async HTTP/1.1 server: one request per connection, prefix routing."""

import asyncio
import socket
from logging import Logger

from tinyhttp.file_manager import FileManager
from tinyhttp.http_constants import HTTPMethod, StandardRoute
from tinyhttp.http_response import HttpResponse
from tinyhttp.request_parser import HTTPParseError, RequestParser
from tinyhttp.route_handler import (
    EchoHandler,
    FileReadHandler,
    FileWriteHandler,
    RootHandler,
    UserAgentHandler,
)
from tinyhttp.router import Router


class HTTPServer:
    """
    Async HTTP/1.1 server using asyncio.

    Every accepted connection runs as its own task: one bounded read, parse,
    dispatch, one write, close. There are no read/write timeouts, no limit on
    concurrent tasks and no keep-alive, whatever the request asks for.

    Known gaps carried on purpose:
    - a request the parser rejects gets no response, the socket is just closed
    - the body is whatever the single read captured, Content-Length is ignored
    - a handler that raises gets no response either
    """

    BUFFER_SIZE = 4096

    def __init__(
        self,
        logger: Logger,
        host: str,
        port: int,
        file_manager: FileManager,
        router: Router | None = None,
    ):
        """
        Initialize HTTP server.

        Args:
            logger: Logger instance for debug/info/error messages
            host: Host address to bind to
            port: Port number to listen on
            file_manager: Serving directory and startup file listing
            router: Optional Router instance (creates default if None)
        """
        self.logger = logger
        self.host = host
        self.port = port
        self.file_manager = file_manager

        # Initialize router with default handlers
        self.router = router or self._create_default_router()

        # Strong references so running connection tasks aren't collected
        self._tasks: set[asyncio.Task] = set()

    def _create_default_router(self) -> Router:
        """
        Create router with standard handlers.

        Returns:
            Router instance with registered handlers
        """
        router = Router()

        router.set_root_handler(RootHandler())
        router.register(HTTPMethod.GET, StandardRoute.ECHO.value, EchoHandler())
        router.register(HTTPMethod.GET, StandardRoute.USER_AGENT.value, UserAgentHandler())
        router.register(
            HTTPMethod.GET,
            StandardRoute.FILES.value,
            FileReadHandler(self.file_manager, self.logger),
        )
        router.register(
            HTTPMethod.POST, StandardRoute.FILES.value, FileWriteHandler(self.file_manager)
        )

        return router

    async def start(self):
        """Bind the listening socket and accept connections forever."""
        listener = socket.create_server((self.host, self.port))
        await self.serve(listener)

    async def serve(self, listener: socket.socket) -> None:
        """
        Run the accept loop on an already bound, listening socket.

        The router is frozen before the first accept. An accept failure is
        not retried: it propagates and ends the server.

        Args:
            listener: Listening TCP socket; closed when the loop ends
        """
        self.router.freeze()
        listener.setblocking(False)
        loop = asyncio.get_running_loop()

        with listener:
            host, port = listener.getsockname()[:2]
            self.logger.info(f"Listening on {host}:{port}")
            while True:
                try:
                    connection, client_address = await loop.sock_accept(listener)
                except OSError as e:
                    self.logger.critical(f"Accept failed, shutting down: {e}")
                    raise

                task = asyncio.create_task(
                    self.handle_connection(connection, client_address)
                )
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)

    async def handle_connection(self, connection: socket.socket, client_address):
        """
        Handle single client connection asynchronously.

        Args:
            connection: Accepted client socket; always closed on return
            client_address: Peer address for logging
        """
        self.logger.info(f"Connection from: {client_address}")
        loop = asyncio.get_running_loop()
        connection.setblocking(False)

        with connection:
            raw_request = await self._receive_request(loop, connection, client_address)
            if raw_request is None:
                return

            try:
                http_request = RequestParser.parse(raw_request)
            except HTTPParseError as e:
                self.logger.warning(f"Dropping request from {client_address}: {e}")
                return

            # Handlers may touch the filesystem, keep that off the event loop
            try:
                response = await asyncio.to_thread(self.router.dispatch, http_request)
            except Exception as e:
                self.logger.error(
                    f"Handler failed for {http_request.method.value} "
                    f"{http_request.path} from {client_address}: {e}",
                    exc_info=True,
                )
                return

            if await self._send_response(loop, connection, response, client_address):
                self.logger.info(
                    f"{http_request.method.value} {http_request.path} "
                    f"-> {response.status_code} for {client_address}"
                )

    async def _receive_request(
        self, loop: asyncio.AbstractEventLoop, connection: socket.socket, client_address
    ) -> bytes | None:
        """
        Receive request bytes with a single bounded read.

        Args:
            loop: Running event loop
            connection: Client socket
            client_address: Client address for logging

        Returns:
            Request bytes or None if the read failed or the peer sent nothing
        """
        self.logger.debug(f"Waiting for data from {client_address}")

        try:
            data = await loop.sock_recv(connection, HTTPServer.BUFFER_SIZE)
        except OSError as e:
            self.logger.warning(f"Read failed for {client_address}: {e}")
            return None

        if not data:
            self.logger.info(f"Connection closed by {client_address}")
            return None

        self.logger.debug(f"Received {len(data)} bytes from {client_address}")
        return data

    async def _send_response(
        self,
        loop: asyncio.AbstractEventLoop,
        connection: socket.socket,
        response: HttpResponse,
        client_address,
    ) -> bool:
        """
        Serialize and write the whole response.

        Returns:
            True if every byte was written, False on a socket error
        """
        try:
            await loop.sock_sendall(connection, response.to_bytes())
        except OSError as e:
            self.logger.warning(f"Write failed for {client_address}: {e}")
            return False
        return True
