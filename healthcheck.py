# healthcheck.py
# Container probe: exit 0 only when /healthz answers 200 with {"ok": true}.
import json
import os
import sys
import time
from http.client import HTTPConnection

PORT = int(os.environ.get("PORT", "8080"))
ATTEMPTS = 3


def proxy_is_healthy(port: int = PORT) -> bool:
    conn = HTTPConnection("127.0.0.1", port, timeout=2)
    try:
        conn.request("GET", "/healthz")
        r = conn.getresponse()
        if r.status != 200:
            return False
        try:
            return json.loads(r.read()).get("ok") is True
        except (ValueError, AttributeError):
            return False
    finally:
        conn.close()


def main() -> int:
    # uvicorn may still be binding during early boot
    for attempt in range(ATTEMPTS):
        try:
            return 0 if proxy_is_healthy() else 1
        except OSError:
            if attempt < ATTEMPTS - 1:
                time.sleep(1.5)
    return 1


if __name__ == "__main__":
    sys.exit(main())
