import socket
import unittest
from unittest.mock import Mock, patch

from simplehttp.http import Method, build_response, http_request_parse
from simplehttp.server import HTTPServer, echo_handler


class ServerTestCase(unittest.TestCase):
    def setUp(self):
        self.config = {
            "url": "127.0.0.1",
            "port": 9999,
        }
        socket_patcher = patch("socket.socket", return_value=Mock())
        signal_patcher = patch("signal.signal")
        self.mock_socket = socket_patcher.start()
        self.mock_signal = signal_patcher.start()
        self.addCleanup(socket_patcher.stop)
        self.addCleanup(signal_patcher.stop)
        self.http_server = HTTPServer(**self.config)

    def tearDown(self):
        self.http_server.close()


class ServerSocketTest(ServerTestCase):
    def test_bind(self):
        self.mock_socket.assert_called_with(socket.AF_INET, socket.SOCK_STREAM)
        server_socket = self.http_server.server_socket
        server_socket.setsockopt.assert_called_with(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        server_socket.bind.assert_called_with(("127.0.0.1", 9999))
        server_socket.listen.assert_called_with(100)
        self.assertEqual(self.mock_signal.call_count, 2)

    @patch("simplehttp.server.threading.Thread")
    def test_listen(self, mock_thread):
        mock_client_socket = Mock()
        client_address = ("127.0.0.1", 8000)
        accepted = [socket.timeout(), (mock_client_socket, client_address)]

        def accept():
            result = accepted.pop(0)
            if isinstance(result, Exception):
                raise result
            self.http_server.shutdown(None, None)
            return result

        self.http_server.server_socket.accept.side_effect = accept
        self.http_server.listen()

        mock_thread.assert_called_once_with(
            name="http_('127.0.0.1', 8000)",
            target=self.http_server.handle_client,
            args=(mock_client_socket, client_address),
            daemon=True,
        )
        mock_thread.return_value.start.assert_called_once_with()
        self.http_server.server_socket.close.assert_called()


class HandleClientTest(ServerTestCase):
    def handle(self, data):
        mock_client_socket = Mock()
        mock_client_socket.recv.return_value = data
        self.http_server.handle_client(mock_client_socket, ("127.0.0.1", 8000))
        return mock_client_socket

    def test_handle_client(self):
        mock_client_socket = self.handle(
            b"POST /greeting HTTP/1.1\r\n"
            b"Host: localhost:3000\r\n"
            b"\r\n"
            b"DATA"
        )
        mock_client_socket.sendall.assert_called_once_with(
            build_response("200", body="DATA").to_bytes()
        )
        mock_client_socket.shutdown.assert_called_once_with(socket.SHUT_RDWR)
        mock_client_socket.close.assert_called_once_with()

    def test_handle_client_with_malformed_request_line(self):
        mock_client_socket = self.handle(b"GET HTTP/1.1\r\n\r\n")
        mock_client_socket.sendall.assert_called_once_with(build_response("400").to_bytes())
        mock_client_socket.close.assert_called_once_with()

    def test_handle_client_with_handler_error(self):
        self.http_server.handler = Mock(side_effect=RuntimeError("boom"))
        with self.assertLogs("simplehttp.server", level="ERROR"):
            mock_client_socket = self.handle(b"GET / HTTP/1.1\r\n\r\n")
        mock_client_socket.sendall.assert_called_once_with(build_response("500").to_bytes())

    def test_handle_client_with_custom_handler(self):
        handler = Mock(return_value=build_response("200", {"X": "1"}, "ok"))
        self.http_server.handler = handler
        mock_client_socket = self.handle(b"GET /custom HTTP/1.1\r\n\r\n")
        self.assertEqual(handler.call_args[0][0].method, Method.GET)
        mock_client_socket.sendall.assert_called_once_with(
            b"HTTP/1.1 200 OK\r\nX:1\r\nContent-Length: 2\r\n\r\nok"
        )

    def test_handle_client_with_send_error(self):
        mock_client_socket = Mock()
        mock_client_socket.recv.return_value = b"GET / HTTP/1.1\r\n\r\n"
        mock_client_socket.sendall.side_effect = BrokenPipeError("closed")
        with self.assertLogs("simplehttp.server", level="WARNING"):
            self.http_server.handle_client(mock_client_socket, ("127.0.0.1", 8000))
        mock_client_socket.close.assert_called_once_with()

    def test_handle_client_with_recv_timeout(self):
        mock_client_socket = Mock()
        mock_client_socket.recv.side_effect = socket.timeout
        self.http_server.handle_client(mock_client_socket, ("127.0.0.1", 8000))
        self.assertEqual(mock_client_socket.sendall.call_count, 0)
        mock_client_socket.close.assert_called_once_with()


class EchoHandlerTest(unittest.TestCase):
    def test_echo_body(self):
        http_request = http_request_parse("POST / HTTP/1.1\n\nhello\n")
        self.assertEqual(echo_handler(http_request), build_response("200", body="hello"))

    def test_unknown_method(self):
        http_request = http_request_parse("PUT / HTTP/1.1\n")
        self.assertEqual(echo_handler(http_request).status_code, "400")

    def test_unknown_version(self):
        http_request = http_request_parse("GET / HTTP/2.0\n")
        self.assertEqual(echo_handler(http_request).status_code, "400")
