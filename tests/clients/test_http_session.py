from grocy_api.clients.http_session import configure_session


class DummySession:
    def __init__(self):
        self.headers = {}
        self.mounted = {}

    def mount(self, prefix, adapter):
        self.mounted[prefix] = adapter


def test_configure_session_sets_headers_and_timeout():
    sess = DummySession()

    def dummy_request(*args, **kwargs):
        return kwargs

    sess.request = dummy_request  # type: ignore[attr-defined]

    configured = configure_session(
        sess,
        headers={"User-Agent": "grocy-test"},
        timeout_seconds=5,
    )

    # Headers applied
    assert configured.headers["User-Agent"] == "grocy-test"
    # No retry adapters: requests go out exactly once
    assert configured.mounted == {}

    # Wrapped request should default timeout
    kwargs = configured.request("GET", "http://example.com")
    assert kwargs["timeout"] == 5
    # An explicit timeout wins
    kwargs = configured.request("GET", "http://example.com", timeout=1)
    assert kwargs["timeout"] == 1


def test_configure_session_without_timeout_keeps_transport_default():
    sess = DummySession()

    def dummy_request(*args, **kwargs):
        return kwargs

    sess.request = dummy_request  # type: ignore[attr-defined]

    configured = configure_session(sess, headers=None)

    assert configured.request is dummy_request
    assert "timeout" not in configured.request("GET", "http://example.com")
