"""Serving-directory context shared read-only by the file handlers."""

import os
from logging import Logger
from pathlib import Path

from tinyhttp.exceptions import FileSecurityError


class FileManager:
    """
    Serving directory plus the listing of files taken at startup.

    Both are fixed at construction time. Handlers on concurrent connection
    tasks share one instance without locking because nothing here is ever
    mutated afterwards.
    """

    def __init__(self, base_directory: str, files: list[Path], logger: Logger):
        """
        Initialize FileManager with a directory and its startup listing.

        Args:
            base_directory: Directory that files are read from and written to
            files: Paths available for serving, enumerated once at startup
            logger: Logger instance for debug/error messages
        """
        self.base_dir = Path(base_directory).resolve()
        self.files = tuple(files)
        self.logger = logger

    @classmethod
    def from_directory(cls, directory: str, logger: Logger) -> "FileManager":
        """
        Enumerate the regular files directly inside a directory.

        Args:
            directory: Directory to serve
            logger: Logger instance

        Returns:
            FileManager whose listing holds every regular file, sorted by name

        Raises:
            ValueError: If directory doesn't exist or isn't a directory
        """
        base_dir = Path(directory).resolve()
        if not base_dir.exists():
            raise ValueError(f"Base directory does not exist: {directory}")
        if not base_dir.is_dir():
            raise ValueError(f"Base directory is not a directory: {directory}")

        files = sorted(entry for entry in base_dir.iterdir() if entry.is_file())
        logger.info(f"Serving {len(files)} file(s) from {base_dir}")
        return cls(str(base_dir), files, logger)

    @classmethod
    def empty(cls, logger: Logger) -> "FileManager":
        """Current working directory with nothing listed for serving."""
        return cls(os.getcwd(), [], logger)

    def find(self, filename: str) -> Path | None:
        """
        Find a servable file by base name.

        The startup listing is searched first, in order. Files written into
        the serving directory after startup are found by their direct path.

        Args:
            filename: Requested name, compared against each entry's base name

        Returns:
            Path of the first match, or None
        """
        match = next((path for path in self.files if path.name == filename), None)
        if match is not None:
            return match

        try:
            candidate = self._validate_path(filename)
        except FileSecurityError:
            return None
        if candidate.parent == self.base_dir and candidate.is_file():
            return candidate
        return None

    def read_file(self, path: Path) -> bytes:
        """
        Read a whole file into memory.

        Raises:
            OSError: If the file can't be read
        """
        self.logger.debug(f"Reading file: {path}")
        return path.read_bytes()

    def write_file(self, filename: str, content: bytes) -> Path:
        """
        Write content to <base_dir>/<filename>, creating or truncating it.

        Args:
            filename: Name relative to the serving directory
            content: File contents as bytes

        Returns:
            Path that was written

        Raises:
            FileSecurityError: If the name resolves outside base_dir
            OSError: If the file can't be opened or written
        """
        file_path = self._validate_path(filename)
        self.logger.debug(f"Writing file: {file_path}")
        with open(file_path, "wb") as file:
            file.write(content)
        return file_path

    def _validate_path(self, filename: str) -> Path:
        """
        Resolve a name inside base_dir.

        Raises:
            FileSecurityError: If the path escapes base_dir or contains null bytes
        """
        if "\0" in filename:
            raise FileSecurityError("Null bytes in filename")

        requested_path = (self.base_dir / filename).resolve()

        try:
            requested_path.relative_to(self.base_dir)
        except ValueError:
            raise FileSecurityError(f"Path traversal attempt detected: {filename}")

        if requested_path == self.base_dir:
            raise FileSecurityError(f"Path names the serving directory: {filename!r}")

        return requested_path
