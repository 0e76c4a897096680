"""Arithmetic server and client speaking a plain-text protocol.

A request reads "<count> <n1> <n2> ... <op>", each number followed by
one space; the reply is the decimal result.
"""

import argparse
import math
import socket
import sys

BUF_SIZE = 10240
BACKLOG = 5
OPERATORS = "+*-"
_DIGITS = "0123456789"


def _int32(value: int) -> int:
    return (value + 2**31) % 2**32 - 2**31


def evaluate(message: str) -> str:
    """Compute the result of a text request and return it as a decimal string."""
    head, _sep, rest = message.partition(" ")
    if any(ch not in _DIGITS for ch in head):
        raise ValueError(f"invalid operand count: {head!r}")

    numbers = []
    digits = ""
    operator = None
    for ch in rest:
        if ch in OPERATORS:
            operator = ch
            break
        if ch == " ":
            numbers.append(int(digits) if digits else 0)
            digits = ""
        elif ch in _DIGITS:
            digits += ch
        else:
            raise ValueError(f"unexpected character {ch!r} in request")

    if operator == "+":
        result = sum(numbers)
    elif operator == "*":
        result = math.prod(numbers)
    elif operator == "-":
        if not numbers:
            raise ValueError("subtraction needs at least one number")
        result = numbers[0] - sum(numbers[1:])
    else:
        result = 0
    return str(_int32(result))


def build_message(numbers, operator: str) -> str:
    """Build the text request for the given numbers and operator."""
    items = [str(number) for number in numbers]
    return f"{len(items)} " + "".join(f"{item} " for item in items) + operator


def serve(port: int, host: str = "") -> None:
    """Answer a single client's request, then stop."""
    with socket.create_server((host, port), backlog=BACKLOG) as server:
        conn, _addr = server.accept()
        with conn:
            data = conn.recv(BUF_SIZE)
            try:
                reply = evaluate(data.decode("ascii"))
            except ValueError:
                return
            conn.sendall(reply.encode("ascii"))


def request(host: str, port: int, numbers, operator: str) -> str:
    """Send one text request and return the server's reply."""
    message = build_message(numbers, operator).encode("ascii")
    with socket.create_connection((host, port)) as sock:
        sock.sendall(message)
        chunks = []
        while chunk := sock.recv(BUF_SIZE - 1):
            chunks.append(chunk)
    if not chunks:
        raise ConnectionError("server closed the connection without a result")
    return b"".join(chunks).decode("ascii")


def main(argv=None) -> int:
    """Run the text calculation server or an interactive client."""
    parser = argparse.ArgumentParser(prog="netlab-textcalc", description="Text arithmetic server and client.")
    commands = parser.add_subparsers(dest="command", required=True)
    server_cmd = commands.add_parser("server", help="answer one client")
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
        count = int(input("How many numbers to compute: "))
        numbers = [input(f"Number {index}: ").strip() for index in range(1, count + 1)]
        operator = input("Operator (+,-,*): ").strip()
        result = request(args.host, args.port, numbers, operator)
    except ValueError as exc:
        print(f"invalid input: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"connect() error: {exc}", file=sys.stderr)
        return 1
    print(f"Result: {result}")
    return 0


if __name__ == "__main__":
    sys.exit(main())