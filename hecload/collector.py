#!/usr/bin/env python3
"""
Stub HEC collector.
Accepts events the way an HEC endpoint does so the load test can be dry-run
locally without a real ingestion cluster.

Usage: HEC_TOKEN=... python -m hecload.collector [port]
"""

import json
import os
import sys
import threading
from datetime import datetime

from flask import Flask, jsonify, request

DEFAULT_PORT = 8088

# Standard HEC response bodies
SUCCESS = {"text": "Success", "code": 0}
TOKEN_REQUIRED = {"text": "Token is required", "code": 2}
INVALID_TOKEN = {"text": "Invalid token", "code": 4}
INVALID_DATA = {"text": "Invalid data format", "code": 6}
EVENT_REQUIRED = {"text": "Event field is required", "code": 12}
HEALTHY = {"text": "HEC is healthy", "code": 17}


def parse_events(raw):
    """
    Split a request body into JSON objects. HEC allows several envelopes
    concatenated back to back in one request.
    """
    decoder = json.JSONDecoder()
    events = []
    pos = 0
    raw = raw.strip()
    while pos < len(raw):
        obj, pos = decoder.raw_decode(raw, pos)
        if not isinstance(obj, dict):
            raise ValueError("envelope must be a JSON object")
        events.append(obj)
        while pos < len(raw) and raw[pos].isspace():
            pos += 1
    if not events:
        raise ValueError("empty body")
    return events


def create_app(token, verbose=False):
    app = Flask(__name__)
    lock = threading.Lock()
    app.config["HEC_TOKEN"] = token
    app.config["EVENTS_RECEIVED"] = 0

    @app.route('/services/collector/health', methods=['GET'])
    def health_check():
        return jsonify(HEALTHY), 200

    @app.route('/services/collector', methods=['POST'])
    @app.route('/services/collector/event', methods=['POST'])
    def collect():
        auth_header = request.headers.get('Authorization')
        if not auth_header:
            return jsonify(TOKEN_REQUIRED), 401
        scheme, _, presented = auth_header.partition(' ')
        if scheme != 'Splunk' or presented != app.config["HEC_TOKEN"]:
            return jsonify(INVALID_TOKEN), 403

        try:
            events = parse_events(request.get_data(as_text=True))
        except ValueError:
            return jsonify(INVALID_DATA), 400

        for envelope in events:
            if envelope.get("event") in (None, ""):
                return jsonify(EVENT_REQUIRED), 400

        with lock:
            app.config["EVENTS_RECEIVED"] += len(events)
            total = app.config["EVENTS_RECEIVED"]

        if verbose:
            first = total - len(events)
            for i, envelope in enumerate(events, start=1):
                print(f"[{datetime.now().strftime('%H:%M:%S')}] #{first + i} "
                      f"host={envelope.get('host')} time={envelope.get('time')} "
                      f"level={envelope['event'].get('level') if isinstance(envelope['event'], dict) else '-'}")
        return jsonify(SUCCESS), 200

    @app.route('/stats', methods=['GET'])
    def stats():
        return jsonify({"events_received": app.config["EVENTS_RECEIVED"]}), 200

    return app


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    port = int(argv[0]) if argv else DEFAULT_PORT

    token = os.environ.get("HEC_TOKEN", "").strip()
    if not token:
        print("ERROR: HEC_TOKEN is not set. The collector needs the token clients will present.")
        return 2

    print(f"Starting stub HEC collector on port {port}")
    print(f"Endpoint: http://localhost:{port}/services/collector")
    app = create_app(token, verbose=True)
    app.run(host='0.0.0.0', port=port, threaded=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
