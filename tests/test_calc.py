import socket
import threading
import time

import pytest

from netlab.calc import (
    OPERAND_SIZE,
    calculate,
    decode_request,
    decode_result,
    encode_request,
    encode_result,
    main,
    request,
    serve,
)


def _free_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def _start_server(port, clients):
    thread = threading.Thread(target=serve, args=(port, "127.0.0.1", clients), daemon=True)
    thread.start()
    return thread


def _retry(func, *args):
    deadline = time.monotonic() + 5
    while True:
        try:
            return func(*args)
        except ConnectionRefusedError:
            if time.monotonic() > deadline:
                raise
            time.sleep(0.02)


def test_subtraction():
    assert calculate([10, 3, 2], "-") == 5


def test_multiplication():
    assert calculate([2, 3, 4], "*") == 24


def test_unknown_operator_returns_first_operand():
    assert calculate([7, 1, 9], "/") == 7


def test_single_operand_is_returned_unchanged():
    assert calculate([42], "+") == 42


def test_results_stay_in_32_bit_range():
    result = calculate([2**31 - 1, 1], "+")
    assert -(2**31) <= result < 2**31
    assert result < 0


def test_calculate_needs_operands():
    with pytest.raises(ValueError):
        calculate([], "+")


def test_request_layout():
    data = encode_request([1, 2, 3], "+")
    assert len(data) == 1 + 3 * OPERAND_SIZE + 1
    assert data[0] == 3
    assert data[-1:] == b"+"


@pytest.mark.parametrize(
    "operands, operator",
    [([1, 2, 3], "+"), ([-5], "-"), ([2**31 - 1, -(2**31)], "*"), ([], "+")],
)
def test_request_round_trip(operands, operator):
    assert decode_request(encode_request(operands, operator)) == (operands, operator)


@pytest.mark.parametrize("value", [0, 1, -1, 2**31 - 1, -(2**31)])
def test_result_round_trip(value):
    assert decode_result(encode_result(value)) == value


def test_encode_rejects_too_many_operands():
    with pytest.raises(ValueError):
        encode_request([1] * 256, "+")


def test_encode_rejects_large_operand():
    with pytest.raises(ValueError):
        encode_request([2**31], "+")


def test_encode_rejects_long_operator():
    with pytest.raises(ValueError):
        encode_request([1], "++")


def test_decode_rejects_truncated_request():
    data = encode_request([1, 2], "+")
    with pytest.raises(ValueError):
        decode_request(data[:-2])


def test_decode_result_rejects_wrong_size():
    with pytest.raises(ValueError):
        decode_result(b"12")


def test_server_answers_each_client():
    port = _free_port()
    thread = _start_server(port, 3)
    cases = [([1, 2, 3], "+"), ([10, 4], "-"), ([3, 5, 7], "*")]
    for operands, operator in cases:
        assert _retry(request, "127.0.0.1", port, operands, operator) == calculate(operands, operator)
    thread.join(timeout=5)
    assert not thread.is_alive()