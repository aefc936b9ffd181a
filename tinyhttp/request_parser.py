from tinyhttp.exceptions import HTTPServerError
from tinyhttp.http_constants import HTTPMethod
from tinyhttp.http_request import HTTPRequest


# Exception Hierarchy
class HTTPParseError(HTTPServerError):
    """Base exception for HTTP parsing errors"""

    pass


class UnknownVerbError(HTTPParseError):
    """Raised when the request line does not start with a supported verb"""

    pass


# HTTP Protocol Constants
LINE_SEPARATOR = "\r\n"
HEADER_BODY_SEPARATOR = "\r\n\r\n"
HEADER_KEY_VALUE_SEPARATOR = ": "
DEFAULT_PATH = "/"
DEFAULT_ENCODING = "utf-8"


class RequestParser:
    """
    HTTP request parser for a single buffered read.

    The parser sees exactly the bytes one read produced. It never asks for
    more, and it ignores Content-Length: a body split across several network
    segments is truncated to whatever arrived first.
    """

    @staticmethod
    def parse(raw_bytes: bytes) -> HTTPRequest:
        """
        Parse raw HTTP request bytes into HTTPRequest object.

        Args:
            raw_bytes: Raw HTTP request as bytes

        Returns:
            HTTPRequest object with parsed data

        Raises:
            UnknownVerbError: If the verb is not GET or POST
        """
        # Invalid UTF-8 is replaced rather than rejected
        request = raw_bytes.decode(DEFAULT_ENCODING, errors="replace")

        head, _, body = request.partition(HEADER_BODY_SEPARATOR)
        req_line, _, header_string = head.partition(LINE_SEPARATOR)

        method, path = RequestParser._parse_request_line(req_line)
        headers = RequestParser._parse_headers(header_string)

        return HTTPRequest(method=method, path=path, headers=headers, body=body)

    @staticmethod
    def _parse_request_line(line: str) -> tuple[HTTPMethod, str]:
        """
        Parse HTTP request line into method and path.

        Args:
            line: Request line string (e.g., "GET /path HTTP/1.1")

        Returns:
            Tuple of (method, path); path defaults to "/" when omitted

        Raises:
            UnknownVerbError: If the first token is not GET or POST
        """
        components = line.split()
        verb = components[0] if components else ""

        try:
            method = HTTPMethod(verb)
        except ValueError:
            raise UnknownVerbError(f"Unsupported HTTP method: {verb!r}") from None

        # Targets not starting with "/" are kept verbatim and match no route
        path = components[1] if len(components) > 1 else DEFAULT_PATH

        return method, path

    @staticmethod
    def _parse_headers(header_string: str) -> list[tuple[str, str]]:
        """
        Parse header lines into ordered (key, value) pairs.

        Keys are lower-cased. A line without ": " becomes a key with an
        empty value. Parsing stops at the first empty line.

        Args:
            header_string: Raw header lines joined by CRLF

        Returns:
            List of header pairs in wire order
        """
        headers: list[tuple[str, str]] = []
        for line in header_string.split(LINE_SEPARATOR):
            if not line:
                break
            key, _, value = line.partition(HEADER_KEY_VALUE_SEPARATOR)
            headers.append((key.lower(), value))
        return headers
