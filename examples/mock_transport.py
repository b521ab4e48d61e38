"""
Testing Without a Network
=========================

Drives the dispatcher with an in-memory transport, a fixed platform and a
custom configuration. Useful for unit tests.
"""

import reqlite


def handler(request: reqlite.PreparedRequest):
    print(f"  → {request.effective_method} {request.url}")
    print(f"    headers:    {list(request.headers)}")
    print(f"    body:       {request.body!r}")
    print(f"    user agent: {request.user_agent}")
    return 200, [b"ab", b"", b"cd"]


def main() -> None:
    config = reqlite.ClientConfig(product="example", version="1.0")
    platform_info = reqlite.StaticPlatformInfo("TestOS", "1.2.3")
    transport = reqlite.MockTransport(handler)

    with reqlite.RequestContext("http://example.org/items", config=config) as context:
        for method, data in (("GET", None), ("POST", {"a": "1"}), ("PUT", None)):
            reqlite.dispatch(
                transport, context, method, data, platform_info=platform_info
            )
            print(f"  ← {context.status_code} {context.response_body!r}")
            print()

    # ── Validation errors never reach the transport ──────────────────────
    with reqlite.RequestContext("http://example.org/items") as context:
        try:
            reqlite.post(transport, context, ["a", "1", "b"])
        except reqlite.InvalidFormData as exc:
            print(f"Rejected: {exc}")

    print(f"Requests performed: {len(transport.requests)}")


if __name__ == "__main__":
    main()
