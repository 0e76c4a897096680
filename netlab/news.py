"""Send a text file as multicast or broadcast datagrams, and receive them."""

import argparse
import socket
import sys
import time

from netlab.addresses import inet_aton

BUF_SIZE = 30
TTL = 64
NEWS_FILE = "news.txt"


def news_chunks(path, size: int = BUF_SIZE):
    """Yield the file in pieces read line by line, each at most size - 1 bytes."""
    if size < 2:
        raise ValueError("chunk size must be at least 2")
    with open(path, "rb") as stream:
        while chunk := stream.readline(size - 1):
            yield chunk


def send_news(path, group: str, port: int, broadcast: bool = False,
              ttl: int = TTL, interval: float = 2) -> int:
    """Send the file to a multicast group or broadcast address; return the datagram count."""
    target = (group, port)
    sent = 0
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        if broadcast:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        else:
            sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, ttl)
        for chunk in news_chunks(path):
            sock.sendto(chunk, target)
            sent += 1
            time.sleep(interval)
    return sent


def receive_news(port: int, group: str = None, out=None, limit: int = None) -> list:
    """Print received datagrams; join `group` first when one is given.

    Stops after `limit` datagrams, or when receiving fails. Returns the texts received.
    """
    out = sys.stdout if out is None else out
    received = []
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind(("", port))
        if group is not None:
            membership = inet_aton(group) + socket.INADDR_ANY.to_bytes(4, "big")
            sock.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, membership)
        while limit is None or len(received) < limit:
            try:
                data, _sender = sock.recvfrom(BUF_SIZE - 1)
            except OSError:
                break
            text = data.decode("utf-8", errors="replace")
            out.write(text)
            out.flush()
            received.append(text)
    return received


def main(argv=None) -> int:
    """Run a news sender or receiver, over multicast or broadcast."""
    parser = argparse.ArgumentParser(prog="netlab-news", description="Multicast and broadcast news.")
    commands = parser.add_subparsers(dest="command", required=True)
    sender = commands.add_parser("send", help="multicast news.txt to a group")
    sender.add_argument("group")
    sender.add_argument("port", type=int)
    receiver = commands.add_parser("receive", help="join a group and print its news")
    receiver.add_argument("group")
    receiver.add_argument("port", type=int)
    brd_sender = commands.add_parser("send-brd", help="broadcast news.txt")
    brd_sender.add_argument("address")
    brd_sender.add_argument("port", type=int)
    brd_receiver = commands.add_parser("receive-brd", help="print broadcast news")
    brd_receiver.add_argument("port", type=int)
    for command in (sender, brd_sender):
        command.add_argument("--file", default=NEWS_FILE)
    args = parser.parse_args(argv)

    try:
        if args.command == "send":
            send_news(args.file, args.group, args.port)
        elif args.command == "send-brd":
            send_news(args.file, args.address, args.port, broadcast=True)
        elif args.command == "receive":
            receive_news(args.port, args.group)
        else:
            receive_news(args.port)
    except FileNotFoundError:
        print("fopen() error", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"invalid address: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"bind() error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())