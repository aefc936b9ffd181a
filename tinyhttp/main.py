import argparse
import asyncio
import logging

from tinyhttp.file_manager import FileManager
from tinyhttp.http_server import HTTPServer

HOST = "127.0.0.1"
PORT = 4221


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="tinyhttp")
    parser.add_argument(
        "--directory",
        default=None,
        help="Directory to serve files from and write uploads to",
    )
    return parser.parse_args(argv)


def create_file_manager(directory: str | None, logger: logging.Logger) -> FileManager:
    """Listing of the given directory, or the working directory with no files."""
    if directory is None:
        return FileManager.empty(logger)
    return FileManager.from_directory(directory, logger)


async def main(argv: list[str] | None = None):
    """Main entry point for the async HTTP server."""
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger(__name__)
    args = parse_args(argv)
    try:
        file_manager = create_file_manager(args.directory, logger)
    except ValueError as e:
        logger.error(f"Cannot serve files: {e}")
        raise SystemExit(1) from None
    http_server = HTTPServer(logger, host=HOST, port=PORT, file_manager=file_manager)
    await http_server.start()


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
