"""Send a file over TCP with a half-close, receive it, and copy files locally."""

import argparse
import socket
import sys

BUF_SIZE = 30
BACKLOG = 5
COPY_BUF = 3
SERVED_FILE = "README.md"
RECEIVED_FILE = "receive.txt"
COPY_SOURCE = "news.txt"
COPY_TARGET = "cpy.txt"
THANKS = b"Thank you\0"


def _terminated_text(data: bytes) -> str:
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def send_file(port: int, path=SERVED_FILE, host: str = "") -> str:
    """Serve the file to one client, half-close, and return the client's reply."""
    with open(path, "rb") as source, socket.create_server((host, port), backlog=BACKLOG) as server:
        conn, _addr = server.accept()
        with conn:
            while chunk := source.read(BUF_SIZE):
                conn.sendall(chunk)
            conn.shutdown(socket.SHUT_WR)
            reply = _terminated_text(conn.recv(BUF_SIZE))
    print(f"Message from client: {reply} ")
    return reply


def receive_file(host: str, port: int, path=RECEIVED_FILE) -> int:
    """Save everything the server sends to `path`, then thank it; return the byte count."""
    total = 0
    with open(path, "wb") as target, socket.create_connection((host, port)) as sock:
        while data := sock.recv(BUF_SIZE):
            target.write(data)
            total += len(data)
        print("Received file data")
        sock.sendall(THANKS)
    return total


def copy_file(source=COPY_SOURCE, target=COPY_TARGET, chunk_size: int = COPY_BUF) -> int:
    """Copy with unbuffered reads of `chunk_size` bytes; return the bytes copied."""
    if chunk_size < 1:
        raise ValueError(f"chunk size must be positive: {chunk_size}")
    total = 0
    with open(source, "rb", buffering=0) as src, open(target, "wb", buffering=0) as dst:
        while chunk := src.read(chunk_size):
            dst.write(chunk)
            total += len(chunk)
    return total


def copy_lines(source=COPY_SOURCE, target=COPY_TARGET, chunk_size: int = COPY_BUF) -> int:
    """Copy text in line pieces of at most chunk_size - 1 characters; return the characters copied."""
    if chunk_size < 2:
        raise ValueError(f"chunk size must be at least 2: {chunk_size}")
    total = 0
    with open(source, "r", newline="") as src, open(target, "w", newline="") as dst:
        while piece := src.readline(chunk_size - 1):
            dst.write(piece)
            total += len(piece)
    return total


def main(argv=None) -> int:
    """Run the file server, the file client, or one of the local copiers."""
    parser = argparse.ArgumentParser(prog="netlab-file", description="File transfer and copy tools.")
    commands = parser.add_subparsers(dest="command", required=True)
    server_cmd = commands.add_parser("server", help="send a file to one client")
    server_cmd.add_argument("port", type=int)
    server_cmd.add_argument("--file", default=SERVED_FILE)
    client_cmd = commands.add_parser("client", help="receive a file")
    client_cmd.add_argument("host")
    client_cmd.add_argument("port", type=int)
    client_cmd.add_argument("--output", default=RECEIVED_FILE)
    for name, text in (("copy", "copy with raw reads"), ("copy-lines", "copy line by line")):
        copy_cmd = commands.add_parser(name, help=text)
        copy_cmd.add_argument("source", nargs="?", default=COPY_SOURCE)
        copy_cmd.add_argument("target", nargs="?", default=COPY_TARGET)
    args = parser.parse_args(argv)

    try:
        if args.command == "server":
            send_file(args.port, args.file)
        elif args.command == "client":
            receive_file(args.host, args.port, args.output)
        elif args.command == "copy":
            copy_file(args.source, args.target)
        else:
            copy_lines(args.source, args.target)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())