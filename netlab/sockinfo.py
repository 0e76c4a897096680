"""Socket option queries and host name lookups."""

import argparse
import socket
import sys
from dataclasses import dataclass
from typing import NamedTuple

from netlab.addresses import inet_aton, inet_ntoa

DEFAULT_BUFFER = 1024 * 3


class BufferSizes(NamedTuple):
    receive: int
    send: int


def buffer_sizes(sock=None) -> BufferSizes:
    """Return the receive and send buffer sizes of `sock`, or of a fresh TCP socket."""
    if sock is None:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as fresh:
            return buffer_sizes(fresh)
    return BufferSizes(
        sock.getsockopt(socket.SOL_SOCKET, socket.SO_RCVBUF),
        sock.getsockopt(socket.SOL_SOCKET, socket.SO_SNDBUF),
    )


def set_buffer_sizes(sock, receive: int = DEFAULT_BUFFER, send: int = DEFAULT_BUFFER) -> BufferSizes:
    """Request new buffer sizes and return the sizes the system granted."""
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_RCVBUF, receive)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_SNDBUF, send)
    return buffer_sizes(sock)


def socket_types():
    """Return the SO_TYPE reported by a TCP socket and by a UDP socket."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as tcp, \
            socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as udp:
        return (
            tcp.getsockopt(socket.SOL_SOCKET, socket.SO_TYPE),
            udp.getsockopt(socket.SOL_SOCKET, socket.SO_TYPE),
        )


@dataclass(frozen=True)
class HostInfo:
    """What a host lookup reports."""

    name: str
    aliases: tuple = ()
    address_type: str = "AF_INET"
    addresses: tuple = ()

    def report(self) -> str:
        """Describe the host in the lookup tools' output format."""
        lines = [f"Official name: {self.name} "]
        lines += [f"Aliases {index}: {alias} " for index, alias in enumerate(self.aliases, start=1)]
        lines.append(f"Address type: {self.address_type} ")
        lines += [f"IP addr {index}: {address} " for index, address in enumerate(self.addresses, start=1)]
        return "\n".join(lines)


def host_by_name(name: str) -> HostInfo:
    """Resolve a host name to its IPv4 addresses; raise OSError when it cannot."""
    official, aliases, addresses = socket.gethostbyname_ex(name)
    return HostInfo(official, tuple(aliases), "AF_INET", tuple(addresses))


def host_by_addr(address: str) -> HostInfo:
    """Look up the host behind an IPv4 address.

    Raises ValueError for a malformed address and OSError when the lookup fails.
    """
    dotted = inet_ntoa(inet_aton(address))
    official, aliases, addresses = socket.gethostbyaddr(dotted)
    return HostInfo(official, tuple(aliases), "AF_INET", tuple(addresses))


def _print_sizes(sizes: BufferSizes) -> None:
    print(f"Input buffer size: {sizes.receive} ")
    print(f"Output buffer size: {sizes.send} ")


def main(argv=None) -> int:
    """Report socket options or look up a host."""
    parser = argparse.ArgumentParser(prog="netlab-sockinfo", description="Socket options and host lookups.")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("buffers", help="show default buffer sizes")
    commands.add_parser("set-buffers", help="set buffers to 3 KiB and show the result")
    commands.add_parser("types", help="show socket types")
    name_cmd = commands.add_parser("name", help="look up a host name")
    name_cmd.add_argument("host")
    addr_cmd = commands.add_parser("addr", help="look up an IPv4 address")
    addr_cmd.add_argument("address")
    args = parser.parse_args(argv)

    try:
        if args.command == "buffers":
            _print_sizes(buffer_sizes())
        elif args.command == "set-buffers":
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
                _print_sizes(set_buffer_sizes(sock))
        elif args.command == "types":
            tcp_type, udp_type = socket_types()
            print(f"SOCK_STREAM: {int(socket.SOCK_STREAM)}")
            print(f"SOCK_DGRAM: {int(socket.SOCK_DGRAM)}")
            print(f"Socket type one: {tcp_type} ")
            print(f"Socket type two: {udp_type} ")
        else:
            try:
                info = host_by_name(args.host) if args.command == "name" else host_by_addr(args.address)
            except (OSError, ValueError):
                print("gethost... error", file=sys.stderr)
                return 1
            print(info.report())
    except OSError as exc:
        print(f"socket option error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())