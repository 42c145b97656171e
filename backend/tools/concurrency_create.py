"""
Fire concurrent product creations that all use the same SKU against a running
server. Exactly one request should get 201; the rest should get 409.

    python tools/concurrency_create.py --workers 16 --sku RACE-1 --warehouse 1
"""
import argparse
import concurrent.futures
import os
from collections import Counter
from uuid import uuid4

import requests

BASE = os.environ.get("STOCKFLOW_BASE", "http://127.0.0.1:8000")


def create_task(i, payload):
    try:
        r = requests.post(f"{BASE}/api/products", json=payload, timeout=20)
        return (i, r.status_code, r.text)
    except requests.RequestException as e:
        return (i, "ERR", str(e))


def run_create_concurrent(workers, payload):
    print(f"Running create test: workers={workers}, sku={payload['sku']}")
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(create_task, i, payload) for i in range(workers)]
        results = [f.result() for f in futures]
    for r in results:
        print(r)
    histogram = Counter(r[1] for r in results)
    print("Status codes:", dict(histogram))
    return histogram


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrent duplicate-SKU creation probe.")
    parser.add_argument("--workers", type=int, default=8)
    parser.add_argument("--sku", default=None, help="defaults to a fresh random SKU")
    parser.add_argument("--warehouse", type=int, default=1)
    parser.add_argument("--qty", type=int, default=5)
    args = parser.parse_args()

    payload = {
        "name": "Race Probe",
        "sku": args.sku or f"RACE-{uuid4().hex[:8].upper()}",
        "price": 1.0,
        "warehouse_id": args.warehouse,
        "initial_quantity": args.qty,
    }
    histogram = run_create_concurrent(args.workers, payload)
    if histogram.get(201, 0) != 1:
        raise SystemExit(f"expected exactly one 201, got {dict(histogram)}")
