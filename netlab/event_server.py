"""Readiness-driven echo server in level-triggered and edge-triggered styles."""

import argparse
import enum
import selectors
import socket
import sys
import threading

BUF_SIZE = 100
BACKLOG = 5
_POLL_INTERVAL = 0.2


class Trigger(enum.Enum):
    """How a client socket is serviced when it is reported readable.

    LEVEL reads one buffer per readiness report and relies on being told
    again while data remains. EDGE switches the socket to non-blocking mode
    and drains it completely on every report.
    """

    LEVEL = "level"
    EDGE = "edge"


class EventEchoServer:
    """Single-threaded echo server built on a readiness selector."""

    def __init__(self, port: int, host: str = "", bufsize: int = BUF_SIZE,
                 trigger=Trigger.LEVEL, out=None):
        if bufsize < 1:
            raise ValueError(f"buffer size must be positive: {bufsize}")
        self.bufsize = bufsize
        self.trigger = Trigger(trigger)
        self.out = out
        self._lock = threading.Lock()
        self._closed = False
        self._serving = False
        self._released = False
        self._clients = set()
        self._sock = socket.create_server((host, port), backlog=BACKLOG)
        self._selector = selectors.DefaultSelector()
        if self.trigger is Trigger.EDGE:
            self._sock.setblocking(False)
        self._selector.register(self._sock, selectors.EVENT_READ)

    def address(self):
        """The (host, port) the server listens on."""
        return self._sock.getsockname()[:2]

    def _say(self, text: str) -> None:
        if self.out is not None:
            print(text, file=self.out)
            self.out.flush()

    def _accept(self) -> None:
        try:
            conn, _addr = self._sock.accept()
        except BlockingIOError:
            return
        conn.setblocking(self.trigger is not Trigger.EDGE)
        self._selector.register(conn, selectors.EVENT_READ)
        self._clients.add(conn)
        self._say(f"connected client : {conn.fileno()} ")

    def _drop(self, conn: socket.socket) -> None:
        fd = conn.fileno()
        self._selector.unregister(conn)
        self._clients.discard(conn)
        conn.close()
        self._say(f"closed client : {fd} ")

    def _read_once(self, conn: socket.socket) -> None:
        try:
            data = conn.recv(self.bufsize)
        except ConnectionError:
            data = b""
        if data:
            conn.sendall(data)
        else:
            self._drop(conn)

    def _drain(self, conn: socket.socket) -> None:
        while True:
            try:
                data = conn.recv(self.bufsize)
            except BlockingIOError:
                return
            except ConnectionError:
                data = b""
            if not data:
                self._drop(conn)
                return
            conn.setblocking(True)
            try:
                conn.sendall(data)
            finally:
                conn.setblocking(False)

    def poll_once(self, timeout=None) -> int:
        """Wait for readiness once and service it; return the number of ready sockets."""
        events = self._selector.select(timeout)
        if events:
            self._say("return epoll_wait")
        for key, _mask in events:
            sock = key.fileobj
            if sock is self._sock:
                self._accept()
            elif self.trigger is Trigger.EDGE:
                self._drain(sock)
            else:
                self._read_once(sock)
        return len(events)

    def serve_forever(self) -> None:
        """Poll until the server is closed, then release its sockets."""
        with self._lock:
            self._serving = True
        try:
            while not self._closed:
                try:
                    self.poll_once(_POLL_INTERVAL)
                except (OSError, ValueError, KeyError):
                    if self._closed:
                        break
                    raise
        finally:
            with self._lock:
                self._serving = False
            self._release()

    def _release(self) -> None:
        with self._lock:
            if self._released:
                return
            self._released = True
        for conn in self._clients:
            conn.close()
        self._clients.clear()
        self._selector.close()
        self._sock.close()

    def close(self) -> None:
        """Stop serving; sockets are released now, or by a running serve_forever."""
        self._closed = True
        with self._lock:
            if self._serving:
                return
        self._release()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def main(argv=None) -> int:
    """Run the event-driven echo server."""
    parser = argparse.ArgumentParser(prog="netlab-event", description="Readiness-driven echo server.")
    parser.add_argument("port", type=int)
    parser.add_argument("--bufsize", type=int, default=BUF_SIZE, help="bytes read per call")
    parser.add_argument("--trigger", choices=[item.value for item in Trigger], default=Trigger.LEVEL.value)
    args = parser.parse_args(argv)
    try:
        server = EventEchoServer(args.port, bufsize=args.bufsize, trigger=args.trigger, out=sys.stdout)
    except ValueError as exc:
        print(f"invalid option: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"bind() error: {exc}", file=sys.stderr)
        return 1
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())