"""
Smoke test script for a running Habit Wheel API

Walks through the main flow against a live server: create a person,
add categories, start a round, click a few cells, record a weight,
shift the round and read the history back.

Prerequisites:
1. Ensure the API server is running (uvicorn main:app)
2. Use a throwaway database; the script creates and deletes its own person

Usage:
    python test_smoke_api.py

Or set environment variables:
    export API_BASE_URL=http://localhost:8000
    python test_smoke_api.py
"""

import os
import sys
import json
import requests
from datetime import date, timedelta
from typing import Dict, Any, Optional

# Configuration
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
SMOKE_PERSON_NAME = os.getenv("SMOKE_PERSON_NAME", "Smoke Test")


class SmokeAPITester:
    def __init__(self, base_url: str):
        self.base_url = base_url
        self.failures = 0

    def call(self, method: str, path: str, expect: int = 200, **kwargs) -> Optional[Dict[str, Any]]:
        """Send one request and report whether it returned ``expect``"""
        url = f"{self.base_url}{path}"
        print(f"\n📤 {method} {path}")
        if "json" in kwargs:
            print(f"   Body: {json.dumps(kwargs['json'])}")

        try:
            response = requests.request(method, url, timeout=10, **kwargs)
        except requests.exceptions.RequestException as e:
            print(f"❌ Request failed: {e}")
            self.failures += 1
            return None

        try:
            result = response.json()
        except ValueError:
            result = None

        if response.status_code != expect:
            print(f"❌ Expected {expect}, got {response.status_code}")
            print(f"   Response: {response.text}")
            self.failures += 1
            return result

        print(f"✅ {response.status_code}")
        print(f"   Response: {json.dumps(result, indent=2)[:600]}")
        return result

    def run_all_tests(self):
        """Run the full flow"""
        print("=" * 70)
        print("🧪 HABIT WHEEL API SMOKE TEST")
        print("=" * 70)
        print(f"Base URL: {self.base_url}")

        start = date.today() - timedelta(days=date.today().weekday())

        print("\n" + "─" * 70)
        print("TEST 1: Probes")
        print("─" * 70)
        self.call("GET", "/health")
        self.call("GET", "/ready")

        print("\n" + "─" * 70)
        print("TEST 2: Create Person (gets a Default tracker)")
        print("─" * 70)
        person = self.call("POST", "/people", expect=201, json={"name": SMOKE_PERSON_NAME})
        if not person:
            print("\n❌ Cannot continue without a person.")
            return
        trackers = self.call("GET", "/trackers", params={"personId": person["id"]}) or []
        if not trackers:
            print("\n❌ Person has no tracker.")
            return
        tracker = trackers[0]

        print("\n" + "─" * 70)
        print("TEST 3: Add Categories")
        print("─" * 70)
        categories = []
        for name, options in (("Workout", {}), ("Diet", {"allowTreat": True, "allowSick": True})):
            payload = {"trackerTypeId": tracker["trackerTypeId"], "name": f"{name} {person['id']}"}
            payload.update(options)
            created = self.call("POST", "/categories", expect=201, json=payload)
            if created:
                categories.append(created)

        print("\n" + "─" * 70)
        print("TEST 4: Start Round")
        print("─" * 70)
        created = self.call("POST", "/rounds/start", expect=201, json={
            "personId": person["id"],
            "trackerId": tracker["id"],
            "startDate": start.isoformat(),
            "lengthWeeks": 4,
            "goalWeight": 170,
        })

        if created and categories:
            round_id = created["id"]

            print("\n" + "─" * 70)
            print("TEST 5: Cycle Entries (EMPTY -> HALF -> DONE)")
            print("─" * 70)
            for _ in range(2):
                self.call("POST", "/entries", json={
                    "roundId": round_id,
                    "categoryId": categories[0]["id"],
                    "date": start.isoformat(),
                })

            print("\n" + "─" * 70)
            print("TEST 6: Set Disallowed Status (Expected to Fail)")
            print("─" * 70)
            self.call("POST", "/entries", expect=400, json={
                "roundId": round_id,
                "categoryId": categories[0]["id"],
                "date": start.isoformat(),
                "mode": "set",
                "status": "TREAT",
            })

            print("\n" + "─" * 70)
            print("TEST 7: Record Weight")
            print("─" * 70)
            self.call("POST", "/weights", json={"roundId": round_id, "date": start.isoformat(), "weight": 180})

            print("\n" + "─" * 70)
            print("TEST 8: Shift Round Forward And Back")
            print("─" * 70)
            self.call("PATCH", f"/rounds/{round_id}", json={"startDate": (start + timedelta(days=2)).isoformat()})
            self.call("PATCH", f"/rounds/{round_id}", json={"startDate": start.isoformat()})

            print("\n" + "─" * 70)
            print("TEST 9: Round History")
            print("─" * 70)
            self.call("GET", f"/people/{person['id']}/rounds")
            self.call("GET", f"/people/{person['id']}/latest-round")

        print("\n" + "─" * 70)
        print("TEST 10: Cleanup")
        print("─" * 70)
        for category in categories:
            self.call("DELETE", f"/categories/{category['id']}")
        self.call("DELETE", f"/people/{person['id']}")

        print("\n" + "=" * 70)
        if self.failures:
            print(f"❌ {self.failures} CHECK(S) FAILED")
        else:
            print("✅ ALL TESTS COMPLETED!")
        print("=" * 70)


def main():
    """Main test runner"""
    tester = SmokeAPITester(API_BASE_URL)
    tester.run_all_tests()
    sys.exit(1 if tester.failures else 0)


if __name__ == "__main__":
    main()
