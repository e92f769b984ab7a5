from __future__ import annotations

import os
import sys
from pathlib import Path

# Allow running as: python scripts/users_smoketest.py
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from fastapi.testclient import TestClient

from user_directory.main import app


def main() -> int:
    # Start from an empty store so the steps below are deterministic.
    os.environ.setdefault("LOAD_SAMPLE_DATA", "false")

    with TestClient(app) as c:
        r = c.post("/api/users", json={"firstName": "John", "lastName": "Doe", "email": "john@x.com"})
        print("create john", r.status_code)
        if r.status_code != 201:
            print(r.text)
            return 1
        john = r.json()

        r = c.post("/api/users", json={"firstName": "Jane", "lastName": "Smith", "email": "jane@x.com"})
        print("create jane", r.status_code)
        jane = r.json()

        r = c.put(f"/api/users/{john['id']}", json={"email": "jane@x.com"})
        print("update john -> jane's email (expect 409)", r.status_code, r.json())
        if r.status_code != 409:
            return 1

        r = c.delete(f"/api/users/{jane['id']}")
        print("delete jane", r.status_code)

        r = c.put(f"/api/users/{john['id']}", json={"email": "jane@x.com"})
        print("update john -> jane's email (expect 200)", r.status_code, r.json())
        if r.status_code != 200:
            return 1

        r = c.get("/api/users/search", params={"name": "jo"})
        print("search 'jo'", r.status_code, r.json())

        r = c.get("/api/users/count")
        print("count", r.status_code, r.json())

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
