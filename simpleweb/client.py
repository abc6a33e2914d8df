"""Load-generating client: concurrent POST rounds or serialised GET requests."""

from __future__ import annotations

import socket
import sys
import threading
import time

from .device import Device
from .logger import Level
from .params import ArgumentError, UsageRequested, parse_client_args
from .protocol import ProtocolError, get_header, get_load
from .transport import Requester

_UID_MAX = 9


def _uid(prefix, index):
    return f"{prefix}-{index}"[:_UID_MAX]


def _report(logger, uid, reply):
    """Log the server name and payload of a reply."""
    try:
        server = get_header(reply, "Server")
    except ProtocolError as exc:
        logger.log(str(exc), Level.ERROR)
        server = None
    try:
        load = get_load(reply)
    except ProtocolError as exc:
        logger.log(str(exc), Level.ERROR)
        load = None
    logger.log("[%s]\tReceive from: %s, response: %s", Level.INFO, uid, server, load)


def _exchange(send, payload, uid, logger, running):
    """Send one request; return False when the client has to stop."""
    logger.log("[%s]\tRequest: %s.", Level.INFO, uid, payload)
    try:
        reply = send(payload)
    except ProtocolError as exc:
        logger.log(str(exc), Level.ERROR)
        return True
    except OSError as exc:
        logger.log("ERROR connecting: %s", Level.ERROR, exc)
        running.clear()
        return False
    _report(logger, uid, reply)
    return True


def _run_threads(names, target):
    threads = [
        threading.Thread(target=target, args=(name,), name=name, daemon=True)
        for name in names
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def _check_thread_num(thread_num):
    if thread_num < 1:
        raise ValueError("thread_num must be at least 1")


def run_concurrent(requester, thread_num, sleep_time, logger, running):
    """Post from thread_num threads in lock-step rounds while running is set."""
    _check_thread_num(thread_num)
    barrier = threading.Barrier(thread_num)
    delay = max(0, sleep_time)

    def worker(uid):
        try:
            while running.is_set():
                body = f'{{"name":"{uid}", "mode": "concurrent"}}'
                if not _exchange(requester.post, body, uid, logger, running):
                    break
                try:
                    barrier.wait()
                except threading.BrokenBarrierError:
                    break
                time.sleep(delay)
        finally:
            barrier.abort()

    _run_threads([_uid("concur", i) for i in range(thread_num)], worker)


def run_fifo(requester, thread_num, sleep_time, logger, running):
    """Send GET requests from thread_num threads, one request at a time."""
    _check_thread_num(thread_num)
    turn = threading.Lock()
    delay = max(0, sleep_time)

    def worker(uid):
        while running.is_set():
            with turn:
                query = f"name={uid}&mode=fifo"
                if not _exchange(requester.get, query, uid, logger, running):
                    break
            time.sleep(delay)

    _run_threads([_uid("fifo", i) for i in range(thread_num)], worker)


def main(argv=None):
    """Run the client from the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    print("** Simple Web Client **")
    device = Device()
    logger = device.logger
    try:
        try:
            params = parse_client_args(args, logger)
        except UsageRequested as exc:
            print(exc.usage, end="")
            return 0
        except ArgumentError as exc:
            print(exc)
            return 1
        try:
            socket.gethostbyname("localhost")
        except OSError:
            logger.log("No such host called 'localhost'", Level.ERROR)
            return 1
        requester = Requester("localhost", device.uid)
        try:
            if not params.workload:
                logger.log("Running in concurrent mode", Level.INFO)
                run_concurrent(
                    requester, params.thread_num, params.sleep_time, logger, device.running
                )
            else:
                logger.log("Running in FIFO mode", Level.INFO)
                run_fifo(
                    requester, params.thread_num, params.sleep_time, logger, device.running
                )
        except ValueError as exc:
            logger.log(str(exc), Level.ERROR)
            return 1
        except KeyboardInterrupt:
            logger.log("Interrupt signal(CTRL+C) received, exiting...", Level.WARNING)
            device.stop()
    finally:
        device.close()
    print("Simple web client stop.")
    return 0


if __name__ == "__main__":
    sys.exit(main())