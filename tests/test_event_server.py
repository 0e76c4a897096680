import io
import socket
import threading
import time

import pytest

from netlab.event_server import EventEchoServer, Trigger


@pytest.fixture
def make_server():
    servers = []

    def factory(**kwargs):
        server = EventEchoServer(0, host="127.0.0.1", **kwargs)
        servers.append(server)
        return server

    yield factory
    for server in servers:
        server.close()


def connect(server):
    client = socket.create_connection(server.address(), timeout=2)
    return client


def read_exactly(sock, size):
    received = b""
    while len(received) < size:
        chunk = sock.recv(size - len(received))
        if not chunk:
            break
        received += chunk
    return received


def test_accept_is_reported_as_one_event(make_server):
    server = make_server()
    with connect(server):
        assert server.poll_once(2) == 1


def test_poll_without_activity_returns_zero(make_server):
    server = make_server()
    assert server.poll_once(0.05) == 0


def test_level_trigger_reads_one_buffer_per_poll(make_server):
    server = make_server(bufsize=2, trigger=Trigger.LEVEL)
    with connect(server) as client:
        server.poll_once(2)
        client.sendall(b"hello")
        time.sleep(0.1)
        assert server.poll_once(2) == 1
        assert client.recv(100) == b"he"
        echoed = b"he"
        while len(echoed) < 5:
            server.poll_once(2)
            echoed += client.recv(100)
        assert echoed == b"hello"


def test_edge_trigger_drains_in_one_poll(make_server):
    server = make_server(bufsize=4, trigger="edge")
    with connect(server) as client:
        server.poll_once(2)
        client.sendall(b"hello world")
        time.sleep(0.1)
        server.poll_once(2)
        assert read_exactly(client, 11) == b"hello world"


def test_trace_output(make_server):
    out = io.StringIO()
    server = make_server(out=out)
    client = connect(server)
    server.poll_once(2)
    client.close()
    time.sleep(0.05)
    server.poll_once(2)
    text = out.getvalue()
    assert "return epoll_wait" in text
    assert "connected client : " in text
    assert "closed client : " in text


def test_invalid_bufsize_rejected():
    with pytest.raises(ValueError):
        EventEchoServer(0, host="127.0.0.1", bufsize=0)


def test_invalid_trigger_rejected():
    with pytest.raises(ValueError):
        EventEchoServer(0, host="127.0.0.1", trigger="sideways")


def test_serve_forever_echoes_several_clients(make_server):
    server = make_server(trigger=Trigger.EDGE)
    runner = threading.Thread(target=server.serve_forever, daemon=True)
    runner.start()
    try:
        with connect(server) as first, connect(server) as second:
            first.sendall(b"one")
            second.sendall(b"two")
            assert read_exactly(first, 3) == b"one"
            assert read_exactly(second, 3) == b"two"
    finally:
        server.close()
        runner.join(timeout=3)
    assert not runner.is_alive()