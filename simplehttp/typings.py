from types import MappingProxyType
from typing import Dict, Mapping, NamedTuple, TypedDict

Headers = Dict[str, str]

# shared by every ResponseDefaults, read-only
STATUS_TEXTS: Mapping[str, str] = MappingProxyType({
    "200": "OK",
    "400": "Bad Request",
    "500": "Internal Server Error",
})


class ResponseDefaults(NamedTuple):
    version: str = "HTTP/1.1"
    status_code: str = "200"
    status_text: str = "OK"
    # installed when a response is built without headers
    content_type: str = "text/html"
    status_texts: Mapping[str, str] = STATUS_TEXTS
    fallback_status_text: str = "Not Found"


class ServerConfig(TypedDict):
    url: str
    port: int
    max_recv_len: int
