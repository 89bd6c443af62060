"""
Integration test script — hits all endpoints and verifies responses.

Usage:
    # Mock adapter (no API key needed):
    LLM_ADAPTER=mock uvicorn llm_arena.web.app:app --port 8000
    python -m llm_arena.scripts.integration_test

    # OpenAI-compatible path against the fake server:
    python -m llm_arena.scripts.fake_llm_server  (terminal 1)
    OPENAI_API_KEY=dummy OPENAI_BASE_URL=http://127.0.0.1:9100/v1 \
        uvicorn llm_arena.web.app:app --port 8000  (terminal 2)
    python -m llm_arena.scripts.integration_test  (terminal 3)
"""

import sys
import time
import httpx

BASE = "http://localhost:8000"
TIMEOUT = 60.0
passed = 0
failed = 0


def test(name: str, method: str, path: str, body: dict | None = None, checks: dict | None = None) -> dict | None:
    global passed, failed
    url = f"{BASE}{path}"
    checks = checks or {}
    try:
        if method == "GET":
            r = httpx.get(url, timeout=TIMEOUT)
        else:
            r = httpx.post(url, json=body or {}, timeout=TIMEOUT)

        if r.status_code != 200:
            print(f"  FAIL  {name} — HTTP {r.status_code}")
            failed += 1
            return None

        data = r.json()
        for key, expected in checks.items():
            actual = data.get(key)
            if actual != expected:
                print(f"  FAIL  {name} — {key}: expected {expected!r}, got {actual!r}")
                failed += 1
                return None

        print(f"  OK    {name}")
        passed += 1
        return data

    except httpx.ConnectError:
        print(f"  FAIL  {name} — connection refused (is the server running?)")
        failed += 1
    except Exception as e:
        print(f"  FAIL  {name} — {type(e).__name__}: {e}")
        failed += 1
    return None


def wait_idle(limit_s: float = 30.0) -> dict | None:
    deadline = time.time() + limit_s
    while time.time() < deadline:
        data = httpx.get(f"{BASE}/status", timeout=TIMEOUT).json()
        if not data["busy"]:
            return data
        time.sleep(0.2)
    return None


def main():
    global failed
    print(f"\nIntegration tests against {BASE}\n")
    print("--- Health & Status ---")
    test("GET /health", "GET", "/health", None, {"all_ok": True})
    test("GET /status", "GET", "/status")

    print("\n--- Classify ---")
    test("POST /classify (empty)", "POST", "/classify",
         {"prompt": "   "},
         {"ok": False, "error": "ERR_EMPTY_PROMPT"})

    wait_idle()
    test("POST /classify (circles)", "POST", "/classify",
         {"prompt": "three circles"},
         {"ok": True, "queued": True})
    test("POST /classify (while busy or just finished)", "POST", "/classify",
         {"prompt": "two squares"})

    data = wait_idle()
    if data is None:
        print("  FAIL  classification did not finish in time")
        failed += 1
    else:
        print(f"  ..    status_text = {data['status_text']!r}")
    test("GET /status (after classify)", "GET", "/status", None, {"has_result": True})

    print("\n--- Rejected prompt ---")
    test("POST /classify (no shape)", "POST", "/classify",
         {"prompt": "make me a sandwich"},
         {"ok": True})
    wait_idle()
    test("GET /status (rejected)", "GET", "/status")

    # Summary
    total = passed + failed
    print(f"\n{'='*40}")
    print(f"  {passed}/{total} passed, {failed} failed")
    print(f"{'='*40}\n")

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
