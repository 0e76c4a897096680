"""Echo server multiplexed with select(), and a console watcher with a timeout."""

import argparse
import os
import select
import socket
import sys

BUF_SIZE = 100
BACKLOG = 5
DEFAULT_TIMEOUT = 5.005
CONSOLE_BUF = 30
CONSOLE_TIMEOUT = 5.0


class SelectEchoServer:
    """Single-threaded echo server watching all its sockets with select()."""

    def __init__(self, port: int, host: str = "", timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout
        self._closed = False
        self._clients = []
        self._sock = socket.create_server((host, port), backlog=BACKLOG)

    def address(self):
        """The (host, port) the server listens on."""
        return self._sock.getsockname()[:2]

    def poll_once(self) -> int:
        """Wait once for activity and handle it; return the number of ready sockets."""
        watched = [self._sock, *self._clients]
        ready, _, _ = select.select(watched, [], [], self.timeout)
        for sock in sorted(ready, key=lambda item: item.fileno()):
            if sock is self._sock:
                conn, _addr = self._sock.accept()
                self._clients.append(conn)
                print(f"Connected client: {conn.fileno()} ")
                continue
            try:
                data = sock.recv(BUF_SIZE)
            except ConnectionError:
                data = b""
            if data:
                sock.sendall(data)
            else:
                fd = sock.fileno()
                self._clients.remove(sock)
                sock.close()
                print(f"closed client: {fd} ")
        return len(ready)

    def serve_forever(self) -> None:
        """Poll until the server is closed."""
        while not self._closed:
            try:
                self.poll_once()
            except (OSError, ValueError):
                if self._closed:
                    break
                raise

    def close(self) -> None:
        """Close every client and the listening socket."""
        self._closed = True
        for conn in self._clients:
            conn.close()
        self._clients = []
        self._sock.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def watch_input(stream, out=None, timeout: float = CONSOLE_TIMEOUT, rounds=None) -> list:
    """Report console input as it arrives and each wait that times out.

    Stops after `rounds` waits, at end of input, or when select fails.
    Returns the messages read.
    """
    out = sys.stdout if out is None else out
    fd = stream if isinstance(stream, int) else stream.fileno()
    messages = []
    done = 0
    while rounds is None or done < rounds:
        done += 1
        try:
            ready, _, _ = select.select([fd], [], [], timeout)
        except (OSError, ValueError):
            out.write("select error!\n")
            break
        if not ready:
            out.write("Time-out!\n")
            continue
        data = os.read(fd, CONSOLE_BUF)
        if not data:
            break
        text = data.decode("utf-8", errors="replace")
        messages.append(text)
        out.write(f"message from console: {text}")
        out.flush()
    return messages


def main(argv=None) -> int:
    """Run the select-based echo server or the console watcher."""
    parser = argparse.ArgumentParser(prog="netlab-select", description="select()-based echo server.")
    commands = parser.add_subparsers(dest="command", required=True)
    server_cmd = commands.add_parser("server", help="echo for every connected client")
    server_cmd.add_argument("port", type=int)
    commands.add_parser("console", help="report standard input with a five-second timeout")
    args = parser.parse_args(argv)

    if args.command == "console":
        try:
            watch_input(sys.stdin)
        except KeyboardInterrupt:
            pass
        return 0

    try:
        server = SelectEchoServer(args.port)
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