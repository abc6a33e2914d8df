"""TCP plumbing: the accept loop and the request/response calls."""

from __future__ import annotations

import socket

from .protocol import (
    ACCEPT_MAX_SIZE,
    RESPONSE_MAX_SIZE,
    SERVER_PORT,
    build_get_request,
    build_post_request,
    build_response,
)

_ACCEPT_POLL = 0.2


def serve(handler, pool, running, host="", port=SERVER_PORT):
    """Accept connections while running is set, handing each to the pool."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        listener.bind((host, port))
        listener.listen(5)
        listener.settimeout(_ACCEPT_POLL)
        while running.is_set():
            try:
                conn, _ = listener.accept()
            except TimeoutError:
                continue
            conn.settimeout(None)
            try:
                pool.submit(handler, conn)
            except Exception:
                conn.close()
                raise


def send_request(host, message, port=SERVER_PORT):
    """Send message to host:port and return the reply text."""
    with socket.create_connection((host, port)) as sock:
        sock.sendall(message.encode("utf-8"))
        chunks = []
        received = 0
        while received < RESPONSE_MAX_SIZE:
            data = sock.recv(RESPONSE_MAX_SIZE - received)
            if not data:
                break
            chunks.append(data)
            received += len(data)
    return b"".join(chunks).decode("utf-8", "replace")


def read_request(conn):
    """Read one request message from a connected socket."""
    data = conn.recv(ACCEPT_MAX_SIZE - 1)
    return data.decode("utf-8", "replace")


def send_response(conn, body):
    """Write a 200 response carrying body to a connected socket."""
    conn.sendall(build_response(body).encode("utf-8"))


class Requester:
    """Sends GET and POST requests to one server on behalf of one device."""

    def __init__(self, host, token, port=SERVER_PORT):
        self.host = host
        self.token = token
        self.port = port

    def get(self, query):
        """Send query as GET parameters and return the reply."""
        message = build_get_request(self.host, self.token, query)
        return send_request(self.host, message, self.port)

    def post(self, body):
        """Send body as a POST payload and return the reply."""
        message = build_post_request(self.host, self.token, body)
        return send_request(self.host, message, self.port)