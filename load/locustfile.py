"""
Locust load script for the hire page API.

Simulates visitors working through the hire wizard:
- Fetch the price catalog once per visitor (/api/v1/pricing/catalog)
- Re-price on every toggle (/api/v1/pricing/estimate), the hot path
- Occasionally submit the finished inquiry (/api/v1/inquiries)
- Optionally list inquiries as the admin (/api/v1/inquiries)

Configure with env vars or Locust UI:
- HOST: pass via `--host http://localhost:8000`
- HIRE_SUBMIT_RATIO: fraction of wizard runs that end in a submission (default 0.05)
- HIRE_ADMIN_TOKEN: admin password; enables the admin listing task when set

Run:
  locust -f load/locustfile.py --host http://localhost:8000
"""

from __future__ import annotations

import logging
import os
import random
import uuid
from typing import Dict, List

from locust import HttpUser, between, events, task


# --- Config -------------------------------------------------------------------

SUBMIT_RATIO = float(os.getenv("HIRE_SUBMIT_RATIO", "0.05") or 0.05)
ADMIN_TOKEN = os.getenv("HIRE_ADMIN_TOKEN", "").strip()

FALLBACK_PROJECT_TYPES = ["personal", "business", "ecommerce", "saas", "enterprise"]
FALLBACK_FEATURES = ["blog", "gallery", "booking", "payments", "newsletter"]
FALLBACK_SERVICES = ["training", "seo", "hosting", "maintenance"]
TIMELINES = ["rush", "normal", "flexible"]


# --- Helpers ------------------------------------------------------------------

def _safe_json(resp) -> Dict:
    try:
        return resp.json()
    except ValueError:
        return {}


def _sample(items: List[str], k_max: int) -> List[str]:
    if not items:
        return []
    return random.sample(items, random.randint(0, min(k_max, len(items))))


# --- Visitor ------------------------------------------------------------------

class HireVisitor(HttpUser):
    wait_time = between(0.5, 2)

    def on_start(self):
        self.project_types = FALLBACK_PROJECT_TYPES
        self.features = FALLBACK_FEATURES
        self.services = FALLBACK_SERVICES
        r = self.client.get("/api/v1/pricing/catalog", name="/pricing/catalog")
        if r.status_code == 200:
            data = _safe_json(r)
            self.project_types = list(data.get("basePackages") or {}) or FALLBACK_PROJECT_TYPES
            self.features = list(data.get("features") or {}) or FALLBACK_FEATURES
            self.services = list(data.get("additionalServices") or {}) or FALLBACK_SERVICES
        self.form = self._fresh_form()

    def _fresh_form(self) -> Dict:
        return {
            "projectType": random.choice(self.project_types),
            "selectedFeatures": [],
            "selectedAdditionalServices": [],
            "timeline": "normal",
            "needsMaintenance": False,
        }

    @task(10)
    def toggle_and_estimate(self):
        self.form["selectedFeatures"] = _sample(self.features, 5)
        self.form["selectedAdditionalServices"] = _sample(self.services, 3)
        self.form["timeline"] = random.choice(TIMELINES)
        self.form["needsMaintenance"] = random.random() < 0.3
        with self.client.post(
            "/api/v1/pricing/estimate",
            json=self.form,
            name="/pricing/estimate",
            catch_response=True,
        ) as r:
            if r.status_code != 200:
                r.failure(f"status {r.status_code}")
                return
            body = _safe_json(r)
            if body.get("min", 0) > body.get("max", 0):
                r.failure("estimate min exceeds max")
            else:
                r.success()

    @task(1)
    def submit_inquiry(self):
        if random.random() > SUBMIT_RATIO:
            return
        tag = uuid.uuid4().hex[:8]
        payload = {
            **self.form,
            "projectGoal": "load test enquiry",
            "name": f"Load Tester {tag}",
            "email": f"load+{tag}@example.com",
            "message": "Generated by the load test.",
        }
        self.client.post("/api/v1/inquiries", json=payload, name="/inquiries [create]")
        self.form = self._fresh_form()

    @task(1)
    def admin_listing(self):
        if not ADMIN_TOKEN:
            return
        self.client.get(
            "/api/v1/inquiries",
            params={"limit": 50},
            headers={"X-Admin-Token": ADMIN_TOKEN},
            name="/inquiries [list]",
        )


# --- Optional event hooks -----------------------------------------------------

@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    logging.getLogger("locust").info(
        "Starting hire page load test (submit ratio %.2f, admin listing %s)",
        SUBMIT_RATIO,
        "on" if ADMIN_TOKEN else "off",
    )


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    logging.getLogger("locust").info("Test finished")
