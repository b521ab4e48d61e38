"""
Basic Requests
==============

Demonstrates the request lifecycle: init, GET / POST / PUT, reading the
context, and close.
"""

import reqlite


def main() -> None:
    # ── GET ──────────────────────────────────────────────────────────────
    context, transport = reqlite.init("https://httpbin.org/get")
    try:
        reqlite.get(transport, context)
        print(f"GET  → {context.status_code}")
        print(f"  Size: {context.response_size} bytes")
        print()
    finally:
        reqlite.close(transport, context)

    # ── POST with form data ──────────────────────────────────────────────
    context, transport = reqlite.init("https://httpbin.org/post")
    try:
        reqlite.post(transport, context, ["name", "reqlite", "greeting", "hello world"])
        print(f"POST → {context.status_code}")
        print(f"  Body: {context.text[:200]}")
        print()
    finally:
        reqlite.close(transport, context)

    # ── PUT without data, with headers ───────────────────────────────────
    context, transport = reqlite.init("https://httpbin.org/put")
    try:
        reqlite.put_with_headers(transport, context, None, ["X-Token: secret-123"])
        print(f"PUT  → {context.status_code}")
        print()
    finally:
        reqlite.close(transport, context)

    # ── One-shot request ─────────────────────────────────────────────────
    context = reqlite.request("GET", "https://httpbin.org/status/418")
    print(f"GET status/418 → {context.status_code}")
    context.close()


if __name__ == "__main__":
    main()
