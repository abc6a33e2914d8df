import io
import socket

import pytest

from simpleweb.logger import Logger
from simpleweb.protocol import (
    build_get_request,
    build_post_request,
    get_header,
    get_load,
)
from simpleweb.server import RESULT_BAD_REQUEST, handle_request, main

SERVER_NAME = "GDOU SimpleWebServer(SWS)/1.0 (Unix) (Ubuntu/Linux)"


def _exchange(message, logger=None):
    client, server = socket.socketpair()
    with client:
        client.sendall(message.encode("utf-8"))
        body = handle_request(server, logger)
        chunks = []
        while True:
            data = client.recv(4096)
            if not data:
                break
            chunks.append(data)
    return body, b"".join(chunks).decode("utf-8"), server


@pytest.fixture
def log_stream():
    return io.StringIO()


def test_post_payload_is_echoed(log_stream):
    logger = Logger(log_stream)
    payload = '{"name":"x"}'
    body, reply, _ = _exchange(build_post_request("localhost", "token", payload), logger)
    logger.close()
    expected = '{"code": 200, "msg": "success", "data": {"name":"x"}}'
    assert body == expected
    assert get_load(reply) == expected
    assert get_header(reply, "Server") == SERVER_NAME
    assert 'From: token, request: {"name":"x"}' in log_stream.getvalue()


def test_get_parameters_become_json():
    message = build_get_request("localhost", "token", "name=fifo-0&mode=fifo")
    body, reply, _ = _exchange(message)
    assert get_load(reply) == body
    assert body.endswith('"data": {"name":"fifo-0","mode":"fifo"}}')


def test_content_length_matches_body():
    body, reply, _ = _exchange(build_post_request("localhost", "token", '{"a":"b"}'))
    assert int(get_header(reply, "Content-Length")) == len(body.encode("utf-8"))


def test_unknown_method_gets_bad_request(log_stream):
    logger = Logger(log_stream)
    body, reply, _ = _exchange("PUT / HTTP/1.1\r\nToken: token\r\n\r\n", logger)
    logger.close()
    assert body == RESULT_BAD_REQUEST
    assert get_load(reply) == RESULT_BAD_REQUEST
    assert "Unrecognized request" in log_stream.getvalue()


def test_missing_token_gets_bad_request():
    body, _, _ = _exchange("POST / HTTP/1.1\r\nHost: localhost\r\n\r\n{}")
    assert body == RESULT_BAD_REQUEST


def test_connection_is_closed_after_reply():
    _, _, server = _exchange(build_post_request("localhost", "token", "{}"))
    assert server.fileno() == -1


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "** Simple Web Server **" in out
    assert "--buffer <int> or -B <int> or <int> <int>" in out


def test_main_rejects_bad_argument(capsys):
    assert main(["x"]) == 1
    assert "Error: Invalid argument 'x'." in capsys.readouterr().out


def test_main_rejects_empty_pool():
    assert main(["-T", "0"]) == 1