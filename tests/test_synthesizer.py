import copy
import random
import re
import time
from datetime import datetime, timezone

from hecload.catalog import LEVELS, build_catalog
from hecload.synthesizer import EventSynthesizer, draw_instant, format_instant

from conftest import ScriptedRandom

NOW = 1700000000  # 2023-11-14T22:13:20Z
WEEK = 7 * 86400
IP_RE = re.compile(r"\b(10\.0|172\.16|192\.168|10\.1|172\.31)\.\d{1,3}\.\d{1,3}\b")

# instant, template, user_id, request_id (6 chars), host
BASIC_DRAWS = [0.5, 0.0, 0.25, 0.0, 0.5, 0.25, 0.75, 0.125, 0.875, 0.5]


def parse_iso(value):
    return datetime.strptime(value, "%Y-%m-%dT%H:%M:%S.%fZ").replace(tzinfo=timezone.utc).timestamp()


def test_golden_envelope_basic(basic_catalog):
    synth = EventSynthesizer(basic_catalog, rng=ScriptedRandom(BASIC_DRAWS), clock=lambda: float(NOW))

    assert synth.synthesize() == {
        "time": 1699697600,
        "event": {
            "level": "INFO",
            "message": "User authentication successful",
            "service": "auth-service",
            "action": "login",
            "result": "success",
            "timestamp": "2023-11-11T10:13:20.000Z",
            "user_id": "user-2500",
            "request_id": "req-0i9r4v",
        },
        "source": "hec-loadtest",
        "sourcetype": "application:json",
        "index": "main",
        "host": "api-02",
    }


def test_golden_envelope_staging(staging_catalog):
    draws = [
        0.5,                # instant
        0.0,                # template 0
        0.0, 0.5, 0.25,     # ip: subnet, octet, octet
        0.25, 0.5,          # email: user, domain
        0.25,               # user_id
        0.0, 0.5, 0.25, 0.75, 0.125, 0.875,
        0.5,                # host
    ]
    rng = ScriptedRandom(draws)
    envelope = EventSynthesizer(staging_catalog, rng=rng, clock=lambda: float(NOW)).synthesize()

    assert envelope["event"]["message"] == (
        "User authentication successful from 10.0.127.63 contact billing@internal.net"
    )
    assert envelope["host"] == "database-replica-01"
    assert envelope["event"]["request_id"] == "req-0i9r4v"
    assert rng.calls == len(draws)


def test_envelope_has_exact_wire_keys(basic_catalog):
    envelope = EventSynthesizer(basic_catalog, rng=random.Random(1)).synthesize()
    assert set(envelope) == {"time", "event", "source", "sourcetype", "index", "host"}
    assert isinstance(envelope["time"], int)


def test_time_matches_event_timestamp():
    for name in ("basic", "k8s", "staging"):
        synth = EventSynthesizer(build_catalog(name), rng=random.Random(42))
        for _ in range(500):
            envelope = synth.synthesize()
            assert parse_iso(envelope["event"]["timestamp"]) == envelope["time"]


def test_time_within_trailing_window(basic_catalog):
    synth = EventSynthesizer(basic_catalog, rng=random.Random(7), clock=lambda: NOW + 0.9)
    for _ in range(2000):
        t = synth.synthesize()["time"]
        assert t <= NOW
        assert NOW - t <= WEEK


def test_time_not_in_future_with_real_clock(basic_catalog):
    synth = EventSynthesizer(basic_catalog, rng=random.Random(3))
    for _ in range(200):
        assert synth.synthesize()["time"] <= time.time()


def test_host_and_level_membership():
    for name in ("basic", "k8s", "staging"):
        catalog = build_catalog(name)
        synth = EventSynthesizer(catalog, rng=random.Random(99))
        for _ in range(500):
            envelope = synth.synthesize()
            assert envelope["host"] in catalog.hosts
            assert envelope["event"]["level"] in LEVELS


def test_synthesis_does_not_mutate_catalog(staging_catalog):
    before = copy.deepcopy(staging_catalog)
    synth = EventSynthesizer(staging_catalog, rng=random.Random(5))
    for _ in range(300):
        synth.synthesize()["event"]["message"] = "tampered"
    assert staging_catalog == before


def test_every_template_is_selected(basic_catalog):
    synth = EventSynthesizer(basic_catalog, rng=random.Random(2024))
    seen = {synth.synthesize()["event"]["message"] for _ in range(1000)}
    assert seen == {t.message.value for t in basic_catalog.templates}


def test_every_host_is_selected(staging_catalog):
    synth = EventSynthesizer(staging_catalog, rng=random.Random(2024))
    seen = {synth.synthesize()["host"] for _ in range(1000)}
    assert seen == set(staging_catalog.hosts)


def test_generators_draw_fresh_values(basic_catalog):
    synth = EventSynthesizer(basic_catalog, rng=random.Random(11))
    request_ids = {synth.synthesize()["event"]["request_id"] for _ in range(200)}
    assert len(request_ids) > 190


def test_synthetic_identifier_formats(staging_catalog):
    synth = EventSynthesizer(staging_catalog, rng=random.Random(8))
    for _ in range(200):
        event = synth.synthesize()["event"]
        assert event["user_id"].startswith("user-")
        assert 0 <= int(event["user_id"][5:]) < 10000
        assert event["request_id"].startswith("req-")
        assert len(event["request_id"]) == 10
        assert IP_RE.search(event["message"]), event["message"]
        if event["service"] != "cache-service":
            assert "@" in event["message"], event["message"]


def test_draw_instant_bounds():
    days_ago, seconds = draw_instant(ScriptedRandom([0.0]), NOW)
    assert (days_ago, seconds) == (0.0, NOW)

    days_ago, seconds = draw_instant(ScriptedRandom([0.5]), NOW, window_days=2)
    assert days_ago == 1.0
    assert seconds == NOW - 86400


def test_format_instant():
    assert format_instant(NOW) == "2023-11-14T22:13:20.000Z"
    assert format_instant(0) == "1970-01-01T00:00:00.000Z"
