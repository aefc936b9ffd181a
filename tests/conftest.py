"""
pytest configuration and fixtures.
"""

import asyncio
import contextlib
import logging
import socket
from pathlib import Path
from typing import Callable

import pytest

from tinyhttp.file_manager import FileManager
from tinyhttp.http_server import HTTPServer


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("tinyhttp.tests")


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request with a User-Agent."""
    return (
        b"GET /user-agent HTTP/1.1\r\n"
        b"Host: localhost:4221\r\n"
        b"User-Agent: foo/1.0\r\n"
        b"Accept: */*\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample HTTP POST request with a body."""
    body = b"hello"
    return (
        b"POST /files/test.txt HTTP/1.1\r\n"
        b"Host: localhost:4221\r\n"
        b"Content-Type: application/octet-stream\r\n"
    ) + f"Content-Length: {len(body)}\r\n\r\n".encode() + body


@pytest.fixture
def serving_dir(tmp_path: Path) -> Path:
    """Temporary serving directory with one file in it."""
    (tmp_path / "hello.txt").write_bytes(b"hello world")
    return tmp_path


@pytest.fixture
def file_manager(serving_dir: Path, logger: logging.Logger) -> FileManager:
    return FileManager.from_directory(str(serving_dir), logger)


async def _run_exchange(
    file_manager: FileManager, logger: logging.Logger, raw_requests: tuple[bytes, ...]
) -> list[bytes]:
    server = HTTPServer(logger, "127.0.0.1", 0, file_manager)
    listener = socket.create_server(("127.0.0.1", 0))
    host, port = listener.getsockname()[:2]
    serve_task = asyncio.create_task(server.serve(listener))

    responses = []
    try:
        # One connection per request, in order
        for raw in raw_requests:
            reader, writer = await asyncio.open_connection(host, port)
            writer.write(raw)
            await writer.drain()
            try:
                response = await asyncio.wait_for(reader.read(), timeout=5.0)
            except ConnectionResetError:
                # Server closed with part of the request still unread
                response = b""
            responses.append(response)
            writer.close()
            with contextlib.suppress(ConnectionError):
                await writer.wait_closed()
    finally:
        serve_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await serve_task

    return responses


@pytest.fixture
def exchange(
    file_manager: FileManager, logger: logging.Logger
) -> Callable[..., list[bytes]]:
    """
    Run a live server on an ephemeral port and send it raw requests.

    Each request goes over its own connection; the result is the list of raw
    bytes read back until the server closed each connection.
    """

    def _exchange(*raw_requests: bytes) -> list[bytes]:
        return asyncio.run(_run_exchange(file_manager, logger, raw_requests))

    return _exchange
