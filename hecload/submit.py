#!/usr/bin/env python3
# submit.py

import json
import sys
import time
from collections import namedtuple
from datetime import datetime

import requests

from hecload.catalog import build_catalog
from hecload.config import ConfigError, load_settings
from hecload.synthesizer import EventSynthesizer

SubmitOutcome = namedtuple("SubmitOutcome", ["status", "body"])

SUCCESS_CODE = 0
SUCCESS_TEXT = "Success"


def is_success(status, body):
    """A submission passes only on HTTP 200 with {"code": 0, "text": "Success"}."""
    if status != 200:
        return False
    try:
        parsed = json.loads(body)
    except (TypeError, ValueError):
        return False
    if not isinstance(parsed, dict):
        return False
    code = parsed.get("code")
    # false == 0 in Python; only a real integer 0 counts
    if isinstance(code, bool) or not isinstance(code, int):
        return False
    return code == SUCCESS_CODE and parsed.get("text") == SUCCESS_TEXT


def hec_headers(token):
    return {
        "Content-Type": "application/json",
        "Authorization": f"Splunk {token}",
    }


class HecClient:
    """Posts envelopes to an HEC collector. One attempt per envelope, no retry."""

    def __init__(self, url, token, timeout=10, session=None):
        if not token:
            raise ConfigError("HEC token is required")
        self.url = url
        self.token = token
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def headers(self):
        return hec_headers(self.token)

    def submit(self, envelope):
        try:
            response = self.session.post(
                self.url,
                data=json.dumps(envelope),
                headers=self.headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            return SubmitOutcome(0, str(e))
        return SubmitOutcome(response.status_code, response.text)


def run_iteration(synthesizer, submit):
    """Build one envelope, hand it to `submit`, return the pass/fail check."""
    outcome = submit(synthesizer.synthesize())
    return is_success(outcome.status, outcome.body)


def send_events(client, synthesizer, count):
    """Submit `count` events one after another and print each result."""
    passed = 0
    for i in range(1, count + 1):
        envelope = synthesizer.synthesize()
        start_time = time.time()
        outcome = client.submit(envelope)
        response_time = (time.time() - start_time) * 1000
        stamp = datetime.now().strftime('%H:%M:%S')
        if is_success(outcome.status, outcome.body):
            passed += 1
            print(f"[{stamp}] Event {i:3d}: SUCCESS | {response_time:6.1f}ms | "
                  f"host={envelope['host']} level={envelope['event']['level']}")
        else:
            print(f"[{stamp}] Event {i:3d}: FAILED  | {response_time:6.1f}ms | "
                  f"Status: {outcome.status} | Response: {outcome.body[:100]}")
    return passed


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    try:
        count = int(argv[0]) if argv else 5
    except ValueError:
        print("Usage: python -m hecload.submit [count]")
        return 2

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"ERROR: {e}")
        return 2

    catalog = build_catalog(settings.profile.name, source=settings.source)
    client = HecClient(settings.url, settings.token, timeout=settings.timeout)
    synthesizer = EventSynthesizer(catalog)

    print("=" * 60)
    print(f"Target:  {settings.url}")
    print(f"Profile: {settings.profile.name}")
    print(f"Events:  {count}")
    print("=" * 60)

    passed = send_events(client, synthesizer, count)

    print("=" * 60)
    print(f"{passed}/{count} events accepted")
    return 0 if passed == count else 1


if __name__ == "__main__":
    sys.exit(main())
