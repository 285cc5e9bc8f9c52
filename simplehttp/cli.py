import argparse
import logging

from .client import send_request
from .http import HTTPRequest, Method, Path, Version
from .server import HTTPServer
from .typings import ServerConfig

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("-u", "--url", help="url", default="127.0.0.1", type=str)
    parser.add_argument("-p", "--port", help="Bind port", default=3000, type=int)
    parser.add_argument(
        "--max_recv_len",
        help="max bytes read from a client connection",
        default=1024,
        type=int,
    )
    parser.add_argument("--debug", help="enable debug log", action="store_true")

    args = parser.parse_args()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    config: ServerConfig = {
        "url": args.url,
        "port": args.port,
        "max_recv_len": args.max_recv_len,
    }
    logger.debug(f"Server setting: {config}")
    HTTPServer(**config).listen()


def client_main():
    parser = argparse.ArgumentParser()
    parser.add_argument("-u", "--url", help="server url", default="127.0.0.1", type=str)
    parser.add_argument("-p", "--port", help="server port", default=3000, type=int)
    parser.add_argument("--method", choices=["GET", "POST"], default="GET")
    parser.add_argument("--path", help="request target", default="/", type=str)
    parser.add_argument(
        "--header",
        help="request header, could be set multiple times",
        action="append",
        nargs=2,
        metavar=("name", "value"),
        default=[],
    )
    parser.add_argument("--body", help="single line body", default="", type=str)
    parser.add_argument("--debug", help="enable debug log", action="store_true")

    args = parser.parse_args()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    http_request = HTTPRequest(
        method=Method(args.method),
        resource=Path(args.path),
        version=Version.V1_1,
        headers=dict(args.header),
        body=args.body,
    )
    logger.debug(f"HTTP request: {http_request!r}")
    response = send_request(args.url, args.port, str(http_request).encode())
    print(response.decode(errors="ignore"))
