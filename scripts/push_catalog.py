#!/usr/bin/env python3
"""
Push a local catalog file through the running catalog API.

Start the API first (in another terminal):
  uvicorn src.api.main:app --host 127.0.0.1 --port 8000

Then run this script:
  python scripts/push_catalog.py data.json --password "$ADMIN_PASSWORD"
  python scripts/push_catalog.py data.json --password secret --base-url http://127.0.0.1:8000
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

import requests


def post_json(url: str, data: Dict[str, Any], timeout: int = 30) -> requests.Response:
    return requests.post(url, json=data, timeout=timeout)


def main() -> int:
    parser = argparse.ArgumentParser(description="Commit a local catalog JSON file via the catalog API")
    parser.add_argument("catalog", type=Path, help="Path to the catalog JSON file")
    parser.add_argument("--password", required=True, help="Admin password")
    parser.add_argument("--base-url", default="http://localhost:8000", help="API base URL")
    args = parser.parse_args()
    base = args.base_url.rstrip("/")

    try:
        new_data = json.loads(args.catalog.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"FAIL: cannot read {args.catalog}: {e}")
        return 1

    print("1) POST /api/verify-admin")
    try:
        r = post_json(f"{base}/api/verify-admin", {"password": args.password})
    except requests.RequestException as e:
        print(f"   FAIL: {e}")
        print("   → Start the API first: uvicorn src.api.main:app --host 127.0.0.1 --port 8000")
        return 1
    if r.status_code != 200:
        print(f"   FAIL ({r.status_code}): {r.json().get('error')}")
        return 1
    print("   access granted\n")

    print("2) POST /api/update-json")
    try:
        r = post_json(f"{base}/api/update-json", {"newData": new_data}, timeout=120)
    except requests.RequestException as e:
        print(f"   FAIL: {e}")
        return 1
    body = r.json()
    if r.status_code != 200:
        print(f"   FAIL ({r.status_code}): {body.get('error')}")
        if body.get("details"):
            print(f"   details: {json.dumps(body['details'])}")
        return 1

    print(f"   commit:   {body['commit']['url']}")
    print(f"   file:     {body['file']['url']}")
    print(f"   download: {body['file']['downloadUrl']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
