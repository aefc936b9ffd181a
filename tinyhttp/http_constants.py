from enum import Enum


class HTTPHeaders(str, Enum):
    """Request header names as stored by the parser (lower-cased)."""

    USER_AGENT = "user-agent"


class ResponseHeaders(str, Enum):
    """Response header names as written on the wire."""

    CONTENT_TYPE = "Content-Type"
    CONTENT_LENGTH = "Content-Length"


class HTTPMethod(str, Enum):
    """Verbs the parser accepts. Anything else is a parse failure."""

    GET = "GET"
    POST = "POST"


class ContentType(str, Enum):
    TEXT_PLAIN = "text/plain"
    OCTET_STREAM = "application/octet-stream"


class StandardRoute(str, Enum):
    """Path prefixes registered by the default route table."""

    ROOT = "/"
    ECHO = "/echo/"
    USER_AGENT = "/user-agent"
    FILES = "/files/"


UNKNOWN_USER_AGENT = "Unknown"
