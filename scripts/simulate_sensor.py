"""
Simple simulator: post a few soil-moisture readings to the API, the way the
pot sensors do, then print the latest snapshot.
Run from the repository root after an editable install, which puts the
project modules (utils, ...) on the import path:
    pip install -e .
    python scripts/simulate_sensor.py
Point it elsewhere with WATERBOY_API (default http://localhost:3000).
"""
import os
import time
import random

import requests

from utils import DRY_REFERENCE, WET_REFERENCE, raw_to_percent

API = os.getenv("WATERBOY_API", "http://localhost:3000")

POTS = [
    ("pot-basil", "Kitchen window"),
    ("pot-fern", "Living room"),
    ("pot-tomato", "Balcony"),
]


def make_reading(pot_id, location):
    raw = random.randint(WET_REFERENCE - 10, DRY_REFERENCE + 10)
    return {
        "pot_id": pot_id,
        "location": location,
        "raw_value": raw,
        "moisture_percent": raw_to_percent(raw),
    }


def main(rounds=3):
    r = requests.get(f"{API}/health", timeout=5)
    print("Health:", r.json())

    for i in range(rounds):
        for pot_id, location in POTS:
            rr = requests.post(f"{API}/api/moisture", json=make_reading(pot_id, location), timeout=5)
            print("reading", i, pot_id, rr.status_code, rr.text)
        time.sleep(1)

    rr = requests.get(f"{API}/api/pots/latest", timeout=5)
    print("latest:", rr.status_code, rr.text)


if __name__ == "__main__":
    main()
