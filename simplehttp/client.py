import socket
import logging

logger = logging.getLogger(__name__)


def send_request(
    url: str,
    port: int,
    data: bytes,
    max_recv_len: int = 1024,
    timeout: float = 1.0,
) -> bytes:
    response = b""
    with socket.create_connection((url, port), timeout=timeout) as client_socket:
        logger.debug(f"Request: {data}")
        client_socket.sendall(data)
        client_socket.shutdown(socket.SHUT_WR)
        while True:
            try:
                chunk = client_socket.recv(max_recv_len)
            except socket.timeout:
                break
            if not chunk:
                break
            response += chunk
    logger.debug(f"Response: {response}")
    return response
