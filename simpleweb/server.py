"""Echo server: answers each request with its payload wrapped in a result."""

from __future__ import annotations

import functools
import sys

from .device import Device
from .logger import Level
from .params import ArgumentError, UsageRequested, parse_server_args
from .pool import ThreadPool
from .protocol import ProtocolError, get_header, resolve_request
from .transport import read_request, send_response, serve

RESULT_SUCCESS = '{"code": 200, "msg": "success", "data": %s}'
RESULT_BAD_REQUEST = '{"code": 400, "msg": "bad request"}'
RESULT_NOT_FOUND = '{"code": 404, "msg": "not found"}'
RESULT_SERVER_ERROR = '{"code": 500, "msg": "server error"}'


def handle_request(conn, logger=None):
    """Read one request from conn, answer it and close conn; return the body sent."""
    with conn:
        message = read_request(conn)
        try:
            device_token = get_header(message, "Token")
            request = resolve_request(message)
        except ProtocolError as exc:
            if logger is not None:
                logger.log("Bad request: %s", Level.ERROR, exc)
            body = RESULT_BAD_REQUEST
        else:
            if logger is not None:
                logger.log("From: %s, request: %s", Level.INFO, device_token, request)
            body = RESULT_SUCCESS % request
        send_response(conn, body)
    return body


def main(argv=None):
    """Run the server from the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    print("** Simple Web Server **")
    device = Device()
    logger = device.logger
    try:
        try:
            params = parse_server_args(args)
        except UsageRequested as exc:
            print(exc.usage, end="")
            return 0
        except ArgumentError as exc:
            print(exc)
            return 1
        try:
            pool = ThreadPool(params.thread_num, params.buffer_size, logger)
        except ValueError as exc:
            logger.log(str(exc), Level.ERROR)
            return 1
        try:
            logger.log("Server is listening on port %d", Level.INFO, 8080)
            serve(functools.partial(handle_request, logger=logger), pool, device.running)
        except KeyboardInterrupt:
            logger.log("Interrupt signal(CTRL+C) received, exiting...", Level.WARNING)
            logger.log("Server is shutting down...", Level.INFO)
        except OSError as exc:
            logger.log("ERROR on binding: %s", Level.ERROR, exc)
            return 1
        finally:
            device.stop()
            pool.shutdown()
    finally:
        device.close()
    print("Simple web server stop.")
    return 0


if __name__ == "__main__":
    sys.exit(main())