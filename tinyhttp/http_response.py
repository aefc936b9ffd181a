from dataclasses import dataclass, field
from http import HTTPStatus

from tinyhttp.http_constants import ResponseHeaders

DEFAULT_ENCODING = "utf-8"


@dataclass
class HttpResponse:
    """
    A response exactly as it will be written.

    No headers are added implicitly: every header, Content-Length included,
    is the job of whoever builds the response. An empty status_text is valid
    and is what the root handler sends.
    """

    status_code: int = HTTPStatus.OK.value
    status_text: str = ""
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: str | bytes = ""

    @classmethod
    def not_found(cls) -> "HttpResponse":
        """Standard 404 with a plain "Not Found" body and no headers."""
        phrase = HTTPStatus.NOT_FOUND.phrase
        return cls(HTTPStatus.NOT_FOUND.value, phrase, [], phrase)

    @classmethod
    def with_content(
        cls, body: str | bytes, content_type: str, status: HTTPStatus = HTTPStatus.OK
    ) -> "HttpResponse":
        """
        Build a response carrying a body with Content-Type and Content-Length.

        The status text is left empty, as for every handler-built response;
        only the standard 404 carries a reason phrase.

        Args:
            body: Text (sent as UTF-8) or raw bytes
            content_type: Value for the Content-Type header
            status: Response status, 200 by default

        Returns:
            HttpResponse with both headers set in that order
        """
        response = cls(status.value, "", [], body)
        response.set_header(ResponseHeaders.CONTENT_TYPE.value, content_type)
        response.set_header(
            ResponseHeaders.CONTENT_LENGTH.value, str(len(response.body_bytes))
        )
        return response

    def set_header(self, key: str, value: str) -> None:
        self.headers.append((key, value))

    @property
    def body_bytes(self) -> bytes:
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode(DEFAULT_ENCODING)

    def to_bytes(self) -> bytes:
        status_line = f"HTTP/1.1 {self.status_code} {self.status_text}"
        headers_lines = [f"{key}: {value}" for key, value in self.headers]
        head = "".join(
            f"{line}\r\n" for line in (status_line, *headers_lines)
        ) + "\r\n"
        return head.encode(DEFAULT_ENCODING) + self.body_bytes
