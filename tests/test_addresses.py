import sys

import pytest

from netlab.addresses import (
    byte_order,
    htonl,
    htons,
    inet_addr,
    inet_aton,
    inet_ntoa,
    main,
)


def test_byte_order_matches_host():
    expected = "Little Endian" if sys.byteorder == "little" else "Big Endian"
    assert byte_order() == expected


def test_htons_puts_bytes_in_network_order():
    assert htons(0x1234).to_bytes(2, sys.byteorder) == bytes([0x12, 0x34])


def test_htonl_puts_bytes_in_network_order():
    assert htonl(0x12345678).to_bytes(4, sys.byteorder) == bytes([0x12, 0x34, 0x56, 0x78])


@pytest.mark.parametrize("value", [0, 1, 0x1234, 0xFFFF, 0x00FF])
def test_htons_is_an_involution(value):
    assert htons(htons(value)) == value


@pytest.mark.parametrize("value", [0, 1, 0x12345678, 0xFFFFFFFF, 0x01020304])
def test_htonl_is_an_involution(value):
    assert htonl(htonl(value)) == value


@pytest.mark.parametrize("func, value", [(htons, 0x10000), (htons, -1), (htonl, 1 << 32), (htonl, -1)])
def test_conversion_rejects_out_of_range(func, value):
    with pytest.raises(ValueError):
        func(value)


def test_inet_addr_rejects_octet_over_255():
    with pytest.raises(ValueError):
        inet_addr("1.2.3.256")


def test_inet_addr_returns_network_ordered_integer():
    assert inet_addr("1.2.3.4").to_bytes(4, sys.byteorder) == bytes([1, 2, 3, 4])


def test_inet_aton_packs_network_bytes():
    assert inet_aton("127.232.124.79") == bytes([127, 232, 124, 79])


def test_inet_ntoa_of_source_values():
    assert inet_ntoa(htonl(0x1020304)) == "1.2.3.4"
    assert inet_ntoa(htonl(0x1010101)) == "1.1.1.1"


@pytest.mark.parametrize("text", ["1.2.3.4", "127.232.124.79", "0.0.0.0", "255.255.255.255"])
def test_addr_round_trip(text):
    assert inet_ntoa(inet_addr(text)) == text
    assert inet_ntoa(inet_aton(text)) == text


def test_short_form_fills_trailing_bytes():
    assert inet_aton("127.1") == bytes([127, 0, 0, 1])


def test_hex_and_octal_parts_are_accepted():
    assert inet_aton("0x7f.0.0.01") == inet_aton("127.0.0.1")


@pytest.mark.parametrize("text", ["", "1..2.3", "1.2.3.4.5", "abc", "08.1.1.1", "1.2.3.-4"])
def test_invalid_addresses_raise(text):
    with pytest.raises(ValueError):
        inet_aton(text)


def test_inet_ntoa_rejects_wrong_length_bytes():
    with pytest.raises(ValueError):
        inet_ntoa(b"\x01\x02\x03")


def test_main_prints_demonstrations(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Error occured!" in out
    assert "Dotted-Decimal notation2: 1.1.1.1" in out
    assert "Dotted-Decimal notation3: 1.2.3.4" in out
    assert out.splitlines()[0] == byte_order()