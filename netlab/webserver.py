"""Minimal threaded HTTP/1.0 file server answering GET requests."""

import argparse
import re
import socket
import sys
import threading
from pathlib import Path

SMALL_BUF = 100
BACKLOG = 20
SERVER_HEADER = "Server:Linux Web Server \r\n"
CONTENT_LENGTH_HEADER = "Content-length:2048\r\n"


class BadRequest(Exception):
    """Raised when a request cannot be served."""


def content_type(file_name: str) -> str:
    """Return the MIME type chosen from the second dot-separated part of the name."""
    parts = [part for part in file_name.split(".") if part]
    if len(parts) < 2:
        raise BadRequest(f"file name has no extension: {file_name!r}")
    return "text/html" if parts[1] in ("html", "htm") else "text/plain"


def parse_request_line(line: str):
    """Return (method, file_name) from an HTTP request line."""
    if "HTTP/" not in line:
        raise BadRequest("not an HTTP request")
    tokens = [token for token in re.split(r"[ /]", line) if token]
    if len(tokens) < 2:
        raise BadRequest("request line is missing the file name")
    return tokens[0], tokens[1]


def error_response() -> bytes:
    """Headers sent for any request that cannot be served."""
    return (
        "HTTP/1.0 400 Bad Request\r\n"
        + SERVER_HEADER
        + CONTENT_LENGTH_HEADER
        + "Content-type:text/html\r\n\r\n"
    ).encode("ascii")


def ok_headers(mime_type: str) -> bytes:
    """Headers sent before the contents of a served file."""
    return (
        "HTTP/1.0 200 OK\r\n"
        + SERVER_HEADER
        + CONTENT_LENGTH_HEADER
        + f"Content-type:{mime_type}\r\n\r\n"
    ).encode("ascii")


def handle_connection(conn: socket.socket, root=".") -> None:
    """Serve one request on `conn` from files under `root`, then close it."""
    with conn, conn.makefile("rb") as reader:
        line = reader.readline(SMALL_BUF - 1).decode("latin-1")
        try:
            method, file_name = parse_request_line(line)
            mime_type = content_type(file_name)
            if method != "GET":
                raise BadRequest(f"unsupported method: {method!r}")
            body = (Path(root) / file_name).read_bytes()
        except (BadRequest, OSError):
            conn.sendall(error_response())
            return
        conn.sendall(ok_headers(mime_type) + body)


def serve(port: int, root=".", host: str = "") -> None:
    """Accept connections forever, handling each on its own thread."""
    with socket.create_server((host, port), backlog=BACKLOG) as server:
        while True:
            conn, address = server.accept()
            print(f"Connection Request : {address[0]}:{address[1]}")
            threading.Thread(target=handle_connection, args=(conn, root), daemon=True).start()


def main(argv=None) -> int:
    """Run the web server."""
    parser = argparse.ArgumentParser(prog="netlab-webserver", description="Serve files over HTTP/1.0.")
    parser.add_argument("port", type=int)
    parser.add_argument("--root", default=".", help="directory holding the served files")
    args = parser.parse_args(argv)
    try:
        serve(args.port, args.root)
    except OSError as exc:
        print(f"bind() error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())