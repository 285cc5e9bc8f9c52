import logging

from .http import (
    HTTPRequest,
    HTTPResponse,
    MalformedRequestLine,
    Method,
    Path,
    Version,
    build_response,
    http_request_parse,
)

__version__ = "0.1.0"

__all__ = [
    "HTTPRequest",
    "HTTPResponse",
    "MalformedRequestLine",
    "Method",
    "Path",
    "Version",
    "build_response",
    "http_request_parse",
]

logging.basicConfig(
    level=logging.INFO,
    datefmt="%Y-%m-%d %H:%M:%S",
    format="%(asctime)s [%(name)s] %(levelname)-8s %(message)s",
)
