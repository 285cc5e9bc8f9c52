import logging
from enum import Enum
from typing import Optional, Tuple

from .typings import Headers, ResponseDefaults

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE = ResponseDefaults()


class MalformedRequestLine(ValueError):
    """Request line with fewer than three whitespace separated tokens."""

    def __init__(self, line: str):
        super().__init__(f"Malformed request line: {line!r}")
        self.line = line


class Method(Enum):
    GET = "GET"
    POST = "POST"
    UNINITIALIZED = ""

    @classmethod
    def _missing_(cls, value):
        return cls.UNINITIALIZED


class Version(Enum):
    V1_1 = "HTTP/1.1"
    UNINITIALIZED = ""

    @classmethod
    def _missing_(cls, value):
        return cls.UNINITIALIZED


class Resource:
    pass


class Path(Resource):
    def __init__(self, path: str):
        self.path = path

    def __eq__(self, other):
        if not isinstance(other, Path):
            return NotImplemented
        return self.path == other.path

    def __hash__(self):
        return hash(self.path)

    def __repr__(self):
        return f"Path({self.path!r})"


def http_request_parse(request: str) -> "HTTPRequest":
    return HTTPRequest.parse(request)


def build_response(
    status_code: str = DEFAULT_RESPONSE.status_code,
    headers: Optional[Headers] = None,
    body: Optional[str] = None,
    defaults: ResponseDefaults = DEFAULT_RESPONSE,
) -> "HTTPResponse":
    if headers is None:
        headers = {"Content-Type": defaults.content_type}
    status_text = defaults.status_texts.get(status_code, defaults.fallback_status_text)
    return HTTPResponse(
        version=defaults.version,
        status_code=status_code,
        status_text=status_text,
        headers=headers,
        body=body,
    )


def process_request_line(line: str) -> Tuple[Method, Version, Path]:
    parts = line.split()
    if len(parts) < 3:
        raise MalformedRequestLine(line)
    method, path, version = parts[:3]
    return Method(method), Version(version), Path(path)


def process_header_line(line: str) -> Tuple[str, str]:
    key, _, value = line.partition(":")
    return key, value.strip()


class HTTPRequest:
    def __init__(
        self,
        method: Method = Method.UNINITIALIZED,
        resource: Resource = Path(""),
        version: Version = Version.UNINITIALIZED,
        headers: Optional[Headers] = None,
        body: str = "",
    ):
        self._method = method
        self._resource = resource
        self._version = version
        self._headers = dict(headers) if headers else {}
        self._body = body

    @classmethod
    def parse(cls, request: str) -> "HTTPRequest":
        method = Method.UNINITIALIZED
        version = Version.UNINITIALIZED
        resource = Path("")
        headers = {}
        body = ""

        for line in request.split("\n"):
            if line.endswith("\r"):
                line = line[:-1]

            if "HTTP" in line:
                method, version, resource = process_request_line(line)
            elif ":" in line:
                key, value = process_header_line(line)
                headers[key] = value
            elif line == "":
                continue
            else:
                # only the last body line is kept
                body = line

        return cls(method, resource, version, headers, body)

    @property
    def method(self) -> Method:
        return self._method

    @property
    def resource(self) -> Resource:
        return self._resource

    @property
    def version(self) -> Version:
        return self._version

    @property
    def headers(self) -> Headers:
        return dict(self._headers)

    @property
    def body(self) -> str:
        return self._body

    def __str__(self):
        path = self._resource.path if isinstance(self._resource, Path) else ""
        http_request = []
        http_request.append(f"{self._method.value} {path} {self._version.value}")
        for field_name, field_value in self._headers.items():
            http_request.append(f"{field_name}: {field_value}")
        http_request.append("")
        http_request.append(self._body)
        return "\r\n".join(http_request)

    def __repr__(self):
        return (
            f"HTTPRequest(method={self._method}, resource={self._resource!r}, "
            f"version={self._version}, headers={self._headers!r}, body={self._body!r})"
        )


class HTTPResponse:
    def __init__(
        self,
        version: str = DEFAULT_RESPONSE.version,
        status_code: str = DEFAULT_RESPONSE.status_code,
        status_text: str = DEFAULT_RESPONSE.status_text,
        headers: Optional[Headers] = None,
        body: Optional[str] = None,
    ):
        self._version = version
        self._status_code = status_code
        self._status_text = status_text
        self._headers = dict(headers) if headers is not None else None
        self._body = body

    @property
    def version(self) -> str:
        return self._version

    @property
    def status_code(self) -> str:
        return self._status_code

    @property
    def status_text(self) -> str:
        return self._status_text

    @property
    def header_map(self) -> Optional[Headers]:
        if self._headers is None:
            return None
        return dict(self._headers)

    @property
    def headers(self) -> str:
        if not self._headers:
            return ""
        headers = []
        for field_name, field_value in self._headers.items():
            # Content-Length is always computed from the body
            if field_name.lower() == "content-length":
                continue
            headers.append(f"{field_name}:{field_value}\r\n")
        return "".join(headers)

    @property
    def body(self) -> str:
        if self._body is None:
            return ""
        return self._body

    def to_bytes(self) -> bytes:
        body = self.body.encode()
        status_line = f"{self._version} {self._status_code} {self._status_text}\r\n"
        head = f"{status_line}{self.headers}Content-Length: {len(body)}\r\n\r\n"
        return head.encode() + body

    def send(self, sink):
        data = self.to_bytes()
        logger.debug(f"Send response: {data}")
        if hasattr(sink, "sendall"):
            sink.sendall(data)
        else:
            sink.write(data)

    def __bytes__(self):
        return self.to_bytes()

    def __str__(self):
        return self.to_bytes().decode()

    def __eq__(self, other):
        if not isinstance(other, HTTPResponse):
            return NotImplemented
        return (
            self._version == other._version
            and self._status_code == other._status_code
            and self._status_text == other._status_text
            and self._headers == other._headers
            and self._body == other._body
        )

    def __repr__(self):
        return (
            f"HTTPResponse(version={self._version!r}, status_code={self._status_code!r}, "
            f"status_text={self._status_text!r}, headers={self._headers!r}, body={self._body!r})"
        )
