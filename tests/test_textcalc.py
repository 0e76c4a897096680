import socket
import threading
import time

import pytest

from netlab.textcalc import build_message, evaluate, request, serve


def _free_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def _retry(func, *args):
    deadline = time.monotonic() + 5
    while True:
        try:
            return func(*args)
        except ConnectionRefusedError:
            if time.monotonic() > deadline:
                raise
            time.sleep(0.02)


def _start_server(port):
    thread = threading.Thread(target=serve, args=(port, "127.0.0.1"), daemon=True)
    thread.start()
    return thread


def test_addition():
    assert evaluate(build_message(["3", "4"], "+")) == "7"


def test_subtraction_from_first_number():
    assert evaluate("3 10 4 3 -") == "3"


def test_multiplication():
    assert evaluate(build_message([2, 3, 4], "*")) == "24"


@pytest.mark.parametrize("numbers, operator", [([1, 2], "+"), (["15"], "-"), ([], "*"), ([7, 8, 9], "*")])
def test_message_layout(numbers, operator):
    message = build_message(numbers, operator)
    assert message.split() == [str(len(numbers)), *map(str, numbers), operator]
    assert message.endswith(" " + operator)


def test_number_without_trailing_space_is_ignored():
    assert evaluate("2 5 6+") == evaluate("1 5 +")


def test_result_wraps_to_32_bits():
    value = int(evaluate(build_message([2**31 - 1, 1], "+")))
    assert -(2**31) <= value < 2**31
    assert value < 0


@pytest.mark.parametrize("message", ["2 3 x +", "0 -", "a 1 +"])
def test_malformed_requests_raise(message):
    with pytest.raises(ValueError):
        evaluate(message)


def test_request_over_network():
    port = _free_port()
    thread = _start_server(port)
    numbers = ["12", "30", "5"]
    assert _retry(request, "127.0.0.1", port, numbers, "+") == evaluate(build_message(numbers, "+"))
    thread.join(timeout=5)
    assert not thread.is_alive()


def test_server_drops_invalid_request():
    port = _free_port()
    thread = _start_server(port)
    with pytest.raises(ConnectionError):
        _retry(request, "127.0.0.1", port, ["x"], "+")
    thread.join(timeout=5)
    assert not thread.is_alive()