"""Byte-order helpers and IPv4 dotted-address conversions."""

import argparse
import string
import sys

INADDR_NONE = 0xFFFFFFFF

_ALLOWED_DIGITS = {16: string.hexdigits, 8: string.octdigits, 10: string.digits}


def byte_order() -> str:
    """Describe the byte order of the running host."""
    return "Little Endian" if sys.byteorder == "little" else "Big Endian"


def _to_network(value: int, width: int, name: str) -> int:
    if not 0 <= value < 1 << (8 * width):
        raise ValueError(f"{name} argument out of range: {value}")
    return int.from_bytes(value.to_bytes(width, "big"), sys.byteorder)


def htons(value: int) -> int:
    """Convert a 16-bit host-order value to network order."""
    return _to_network(value, 2, "htons")


def htonl(value: int) -> int:
    """Convert a 32-bit host-order value to network order."""
    return _to_network(value, 4, "htonl")


def _parse_part(part: str, text: str) -> int:
    if part[:2].lower() == "0x":
        digits, base = part[2:], 16
    elif len(part) > 1 and part[0] == "0":
        digits, base = part[1:], 8
    else:
        digits, base = part, 10
    if not digits or any(ch not in _ALLOWED_DIGITS[base] for ch in digits):
        raise ValueError(f"invalid IPv4 address: {text!r}")
    return int(digits, base)


def _parse_ipv4(text: str) -> int:
    """Parse a classic dotted address (1 to 4 parts) into a host-order integer."""
    parts = text.split(".")
    if not 1 <= len(parts) <= 4:
        raise ValueError(f"invalid IPv4 address: {text!r}")
    values = [_parse_part(part, text) for part in parts]
    *head, last = values
    tail_bits = 8 * (5 - len(values))
    if any(value > 0xFF for value in head) or last >= 1 << tail_bits:
        raise ValueError(f"invalid IPv4 address: {text!r}")
    result = 0
    for value in head:
        result = (result << 8) | value
    return (result << tail_bits) | last


def inet_addr(text: str) -> int:
    """Return the address as a network-ordered integer; raise ValueError if invalid."""
    return htonl(_parse_ipv4(text))


def inet_aton(text: str) -> bytes:
    """Return the address as four bytes in network order; raise ValueError if invalid."""
    return _parse_ipv4(text).to_bytes(4, "big")


def inet_ntoa(value) -> str:
    """Format a network-ordered integer or four packed bytes as dotted decimal."""
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 4:
            raise ValueError("packed IPv4 address must be 4 bytes long")
        packed = bytes(value)
    else:
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"address out of range: {value}")
        packed = value.to_bytes(4, sys.byteorder)
    return ".".join(str(octet) for octet in packed)


def _hex(value: int) -> str:
    return f"{value:#x}" if value else "0"


def main(argv=None) -> int:
    """Print the byte-order and address-conversion demonstrations."""
    parser = argparse.ArgumentParser(
        prog="netlab-addresses",
        description="Show host byte order and IPv4 address conversions.",
    )
    parser.parse_args(argv)

    print(byte_order())

    host_port, host_addr = 0x1234, 0x12345678
    print(f"Host ordered port: {_hex(host_port)} ")
    print(f"Network ordered port: {_hex(htons(host_port))} ")
    print(f"Host ordered address: {_hex(host_addr)} ")
    print(f"Network ordered address: {_hex(htonl(host_addr))} ")

    for text in ("1.2.3.4", "1.2.3.256"):
        try:
            print(f"Network ordered integer addr: {_hex(inet_addr(text))} ")
        except ValueError:
            print("Error occured! ")

    try:
        packed = inet_aton("127.232.124.79")
    except ValueError:
        print("Conversion error", file=sys.stderr)
        return 1
    print(f"Network ordered integer addr: {_hex(int.from_bytes(packed, sys.byteorder))} ")

    first = inet_ntoa(htonl(0x1020304))
    second = inet_ntoa(htonl(0x1010101))
    print(f"Dotted-Decimal notation1: {first} ")
    print(f"Dotted-Decimal notation2: {second} ")
    print(f"Dotted-Decimal notation3: {first} ")
    return 0


if __name__ == "__main__":
    sys.exit(main())