"""Arithmetic server and client speaking a small binary protocol.

A request is one byte holding the operand count, that many 4-byte
host-order signed integers, and one byte holding the operator.
The reply is the 4-byte host-order signed result.
"""

import argparse
import math
import socket
import struct
import sys

OPERAND_SIZE = 4
RESULT_SIZE = 4
BACKLOG = 5
MAX_OPERANDS = 255

_INT = struct.Struct("=i")


def _int32(value: int) -> int:
    return (value + 2**31) % 2**32 - 2**31


def calculate(operands, operator: str) -> int:
    """Fold the operands with '+', '-' or '*'; any other operator yields the first operand."""
    values = list(operands)
    if not values:
        raise ValueError("at least one operand is required")
    result, rest = values[0], values[1:]
    if operator == "+":
        result += sum(rest)
    elif operator == "-":
        result -= sum(rest)
    elif operator == "*":
        result *= math.prod(rest)
    return _int32(result)


def encode_request(operands, operator: str) -> bytes:
    """Build the wire form of a calculation request."""
    values = list(operands)
    if len(values) > MAX_OPERANDS:
        raise ValueError(f"at most {MAX_OPERANDS} operands fit in a request")
    try:
        op_byte = operator.encode("latin-1")
    except UnicodeEncodeError as exc:
        raise ValueError(f"operator must be a single byte: {operator!r}") from exc
    if len(op_byte) != 1:
        raise ValueError(f"operator must be a single character: {operator!r}")
    try:
        body = b"".join(_INT.pack(value) for value in values)
    except struct.error as exc:
        raise ValueError(f"operand out of 32-bit range: {exc}") from exc
    return bytes([len(values)]) + body + op_byte


def decode_request(data: bytes):
    """Split a request into its operand list and operator character."""
    if not data:
        raise ValueError("empty request")
    count = data[0]
    expected = 1 + count * OPERAND_SIZE + 1
    if len(data) != expected:
        raise ValueError(f"request of {len(data)} bytes, expected {expected}")
    operands = [value for (value,) in _INT.iter_unpack(data[1:-1])]
    return operands, chr(data[-1])


def encode_result(value: int) -> bytes:
    """Pack a result as a 4-byte signed integer."""
    return _INT.pack(_int32(value))


def decode_result(data: bytes) -> int:
    """Unpack a 4-byte result."""
    if len(data) != RESULT_SIZE:
        raise ValueError(f"result must be {RESULT_SIZE} bytes, got {len(data)}")
    return _INT.unpack(data)[0]


def _recv_exact(conn: socket.socket, size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining:
        chunk = conn.recv(remaining)
        if not chunk:
            raise ConnectionError("connection closed before the message was complete")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def serve(port: int, host: str = "", clients: int = 5) -> None:
    """Answer one calculation request from each of `clients` connections."""
    with socket.create_server((host, port), backlog=BACKLOG) as server:
        for _ in range(clients):
            conn, _addr = server.accept()
            with conn:
                try:
                    header = _recv_exact(conn, 1)
                    body = _recv_exact(conn, header[0] * OPERAND_SIZE + 1)
                    operands, operator = decode_request(header + body)
                    result = calculate(operands, operator)
                except (ConnectionError, ValueError):
                    continue
                conn.sendall(encode_result(result))


def request(host: str, port: int, operands, operator: str) -> int:
    """Send one calculation to a server and return its result."""
    payload = encode_request(operands, operator)
    with socket.create_connection((host, port)) as sock:
        sock.sendall(payload)
        return decode_result(_recv_exact(sock, RESULT_SIZE))


def main(argv=None) -> int:
    """Run the calculation server or an interactive client."""
    parser = argparse.ArgumentParser(prog="netlab-calc", description="Binary arithmetic server and client.")
    commands = parser.add_subparsers(dest="command", required=True)
    server_cmd = commands.add_parser("server", help="serve five clients")
    server_cmd.add_argument("port", type=int)
    client_cmd = commands.add_parser("client", help="send one calculation")
    client_cmd.add_argument("host")
    client_cmd.add_argument("port", type=int)
    args = parser.parse_args(argv)

    if args.command == "server":
        try:
            serve(args.port)
        except OSError as exc:
            print(f"bind() error: {exc}", file=sys.stderr)
            return 1
        except KeyboardInterrupt:
            pass
        return 0

    try:
        count = int(input("Operand count: "))
        operands = [int(input(f"Operand {index}: ")) for index in range(1, count + 1)]
        operator = input("Operator: ").strip()[:1]
        result = request(args.host, args.port, operands, operator)
    except ValueError as exc:
        print(f"invalid input: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"connect() error: {exc}", file=sys.stderr)
        return 1
    print(f"Operation result: {result} ")
    return 0


if __name__ == "__main__":
    sys.exit(main())