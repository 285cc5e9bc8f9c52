import signal
import socket
import threading
import logging
from typing import Callable
from types import FrameType

from .http import (
    HTTPRequest,
    HTTPResponse,
    MalformedRequestLine,
    Method,
    Version,
    build_response,
    http_request_parse,
)

logger = logging.getLogger(__name__)

Handler = Callable[[HTTPRequest], HTTPResponse]


def echo_handler(request: HTTPRequest) -> HTTPResponse:
    if request.method == Method.UNINITIALIZED or request.version == Version.UNINITIALIZED:
        return build_response("400")
    return build_response("200", body=request.body)


class HTTPServer:
    def __init__(
        self,
        url: str,
        port: int,
        handler: Handler = echo_handler,
        max_recv_len: int = 1024,
    ):
        self.__max_recv_len = max_recv_len
        self.__default_socket_timeout = 1
        self.__listen_flag = True
        self.handler = handler

        socket.setdefaulttimeout(self.__default_socket_timeout)

        # Shutdown on Ctrl+C
        signal.signal(signal.SIGINT, self.shutdown)
        signal.signal(signal.SIGTERM, self.shutdown)

        self.server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        self.server_socket.bind((url, port))

        self.server_socket.listen(100)
        logger.info(f"HTTP server: {url}:{port}")

    def listen(self):
        while self.__listen_flag:
            try:
                (client_socket, client_address) = self.server_socket.accept()
            except socket.timeout:
                continue

            logger.debug(f"Get new connect: {client_address}")

            client_thread = threading.Thread(
                name=self._get_client_name(client_address),
                target=self.handle_client,
                args=(client_socket, client_address),
                daemon=True,
            )
            client_thread.start()
        self.close()

    def close(self):
        self.server_socket.close()

    def handle_client(self, client_socket: socket.socket, client_address: tuple):
        try:
            data = client_socket.recv(self.__max_recv_len)
        except (socket.error, socket.timeout) as err:
            logger.warning(f"Receive from {client_address} failed: {err}")
            self._close_client(client_socket)
            return
        logger.debug(data)

        response = self.get_response(data.decode(errors="ignore"), client_address)

        try:
            response.send(client_socket)
        except OSError as err:
            logger.warning(f"Send to {client_address} failed: {err}")
        self._close_client(client_socket)

    def get_response(self, text: str, client_address: tuple) -> HTTPResponse:
        try:
            http_request = http_request_parse(text)
        except MalformedRequestLine as err:
            logger.warning(f"{client_address[0]}:{client_address[1]} {err}")
            return build_response("400")

        logger.info(
            f"{client_address[0]}:{client_address[1]} -> "
            f"{http_request.method.value} {http_request.resource.path}"
        )
        logger.debug(f"HTTP request: {http_request!r}")

        try:
            return self.handler(http_request)
        except Exception:
            logger.exception(f"Handler failed for {client_address}")
            return build_response("500")

    def shutdown(self, signal_handler: signal.Signals, frame: FrameType):
        self.__listen_flag = False

    def _close_client(self, client_socket: socket.socket):
        try:
            logger.debug("Shutdown client socket")
            client_socket.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        try:
            logger.debug("Close client socket")
            client_socket.close()
        except OSError:
            pass

    def _get_client_name(self, address: tuple) -> str:
        return f"http_{address}"
