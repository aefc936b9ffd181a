from dataclasses import dataclass, field

from tinyhttp.http_constants import HTTPMethod


@dataclass
class HTTPRequest:
    method: HTTPMethod
    path: str
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: str = ""

    def get_header(self, name: str) -> str | None:
        """
        Look up a header value case-insensitively.

        Keys are stored lower-cased by the parser, so only the lookup name
        needs folding. Duplicates are kept in order and the first one wins.

        Args:
            name: Header name in any case (e.g. "User-Agent")

        Returns:
            Header value, or None if the request did not carry it
        """
        wanted = name.lower()
        return next((value for key, value in self.headers if key == wanted), None)
