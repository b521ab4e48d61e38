import json
import platform

import pytest

import reqlite


@pytest.fixture
def session(server):
    def _open(path: str = "", **kwargs):
        return reqlite.init(server.url + path, **kwargs)

    return _open


def test_get(session):
    context, transport = session()
    try:
        reqlite.get(transport, context)
        assert context.status_code == 200
        assert context.response_body == b"Hello, world!"
        assert context.response_size == 13
    finally:
        reqlite.close(transport, context)
    assert context.closed


def test_get_sends_user_agent(session):
    context, transport = session("echo_headers")
    try:
        reqlite.get(transport, context, headers=["X-Trace: abc"])
        headers = json.loads(context.text)
    finally:
        reqlite.close(transport, context)
    assert headers["x-trace"] == "abc"
    assert headers["user-agent"] == (
        f"reqlite/{reqlite.__version__} {platform.system()}/{platform.release()}"
    )
    assert "content-length" not in headers


def test_get_chunked_response(session):
    context, transport = session("chunked")
    try:
        reqlite.get(transport, context)
        assert context.response_body == b"one,two,three"
        assert context.response_size == 13
    finally:
        reqlite.close(transport, context)


def test_post(session):
    context, transport = session("echo_request")
    try:
        reqlite.post(transport, context, ["a", "1", "b", "x y"])
        assert context.status_code == 200
        assert json.loads(context.text) == {"method": "POST", "body": "a=1&b=x%20y"}
    finally:
        reqlite.close(transport, context)


def test_put(session):
    context, transport = session("echo_request")
    try:
        reqlite.put(transport, context, [("name", "value")])
        assert json.loads(context.text) == {"method": "PUT", "body": "name=value"}
    finally:
        reqlite.close(transport, context)


def test_post_without_data_sends_empty_length(session):
    context, transport = session("echo_headers")
    try:
        reqlite.post_with_headers(transport, context, None, ["X-Test: 1"])
        headers = json.loads(context.text)
    finally:
        reqlite.close(transport, context)
    assert headers["content-length"] == "0"
    assert headers["x-test"] == "1"


def test_put_with_headers(session):
    context, transport = session("echo_headers")
    try:
        reqlite.put_with_headers(transport, context, {"a": "1"}, ["X-Test: 2"])
        headers = json.loads(context.text)
    finally:
        reqlite.close(transport, context)
    assert headers["content-length"] == "3"
    assert headers["content-type"] == "application/x-www-form-urlencoded"
    assert headers["x-test"] == "2"


def test_status_codes_are_recorded(session):
    context, transport = session("status/404")
    try:
        reqlite.get(transport, context)
        assert context.status_code == 404
        assert context.text == "Hello, world!"
    finally:
        reqlite.close(transport, context)


def test_request(server):
    context = reqlite.request("POST", server.url + "echo_request", data={"k": "v"})
    assert context.status_code == 200
    assert json.loads(context.text)["body"] == "k=v"
    context.close()


def test_response_too_large(server):
    config = reqlite.ClientConfig(max_response_size=5)
    with pytest.raises(reqlite.ResponseTooLarge):
        reqlite.request("GET", server.url, config=config)


def test_connect_error():
    context, transport = reqlite.init("http://127.0.0.1:1/")
    try:
        with pytest.raises(reqlite.ConnectError) as exc_info:
            reqlite.get(transport, context)
        assert exc_info.value.context is context
        assert context.status_code == 0
        assert context.response_body == b""
    finally:
        reqlite.close(transport, context)


def test_init_with_invalid_url():
    with pytest.raises(reqlite.InvalidURL):
        reqlite.init("")


def test_close_leaves_transport_open_while_context_is_busy():
    context, transport = reqlite.init("http://example.org/")
    context._begin()
    with pytest.raises(reqlite.ContextInUse) as exc_info:
        reqlite.close(transport, context)
    assert exc_info.value.context is context
    assert not transport.is_closed
    assert not context.closed

    context._finish()
    reqlite.close(transport, context)
    assert transport.is_closed
    assert context.closed


def test_request_leaves_caller_transport_open():
    transport = reqlite.MockTransport(lambda request: (200, [b"ok"]))
    context = reqlite.request("GET", "http://example.org/", transport=transport)
    assert context.text == "ok"
    assert not transport.is_closed

    context = reqlite.request("POST", "http://example.org/", transport=transport)
    assert context.status_code == 200
    assert len(transport.requests) == 2
    transport.close()


def test_request_closes_context_on_failure():
    transport = reqlite.MockTransport(lambda request: (200, [b"too long"]))
    config = reqlite.ClientConfig(max_response_size=3)
    with pytest.raises(reqlite.ResponseTooLarge) as exc_info:
        reqlite.request("GET", "http://example.org/", config=config, transport=transport)
    assert exc_info.value.context.closed
    assert not transport.is_closed


def test_request_closes_context_on_invalid_method():
    with pytest.raises(reqlite.InvalidMethod) as exc_info:
        reqlite.request("DELETE", "http://example.org/")
    assert exc_info.value.context.closed


def test_request_closes_its_own_transport(monkeypatch):
    created = []

    class RecordingTransport(reqlite.MockTransport):
        def __init__(self, config=None):
            super().__init__(lambda request: 204)
            created.append(self)

    monkeypatch.setattr(reqlite._api, "HTTPXTransport", RecordingTransport)
    context = reqlite.request("PUT", "http://example.org/", data={"a": "1"})
    assert context.status_code == 204
    assert not context.closed
    assert [transport.is_closed for transport in created] == [True]
    context.close()
