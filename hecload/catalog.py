# catalog.py

"""
Fixed catalogs the synthesizer draws from: event templates, host names,
email users/domains and private subnet prefixes.

Three catalogs are provided, one per traffic profile:
- basic:   structured events, short host names
- k8s:     structured events, realistic service hostnames
- staging: every message embeds an IP and an email so the redaction
           pipeline has something to hash
"""

from dataclasses import dataclass
from typing import Any, Callable, Tuple

from hecload.config import ConfigError

LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


# ─── Field specs ─────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Literal:
    value: Any

    def resolve(self, draw):
        return self.value


@dataclass(frozen=True)
class Generator:
    fn: Callable

    def resolve(self, draw):
        return self.fn(draw)


def as_spec(value):
    """Wrap a plain value in Literal and a callable in Generator."""
    if isinstance(value, (Literal, Generator)):
        return value
    if callable(value):
        return Generator(value)
    return Literal(value)


@dataclass(frozen=True)
class EventTemplate:
    level: str
    message: Any
    service: str
    fields: Tuple[Tuple[str, Any], ...] = ()

    def __post_init__(self):
        if self.level not in LEVELS:
            raise ConfigError(f"Unknown level {self.level!r}, expected one of {LEVELS}")
        object.__setattr__(self, "message", as_spec(self.message))
        object.__setattr__(self, "fields", tuple((k, as_spec(v)) for k, v in self.fields))

    def render(self, draw):
        """Resolve every field of the template into a fresh event dict."""
        event = {
            "level": self.level,
            "message": self.message.resolve(draw),
            "service": self.service,
        }
        for key, spec in self.fields:
            event[key] = spec.resolve(draw)
        return event


def template(level, message, service, **fields):
    return EventTemplate(level, message, service, tuple(fields.items()))


@dataclass(frozen=True)
class Catalog:
    name: str
    templates: Tuple[EventTemplate, ...]
    hosts: Tuple[str, ...]
    email_users: Tuple[str, ...]
    email_domains: Tuple[str, ...]
    subnets: Tuple[str, ...]
    source: str = "hec-loadtest"
    sourcetype: str = "application:json"
    index: str = "main"

    def __post_init__(self):
        for attr in ("templates", "hosts", "email_users", "email_domains", "subnets"):
            value = tuple(getattr(self, attr))
            if not value:
                raise ConfigError(f"Catalog '{self.name}': {attr} must not be empty")
            object.__setattr__(self, attr, value)


class Draw:
    """
    Random helpers handed to every generator field.
    All draws go through rng.random() so a scripted source fully
    determines the output.
    """

    def __init__(self, rng, catalog):
        self.rng = rng
        self.catalog = catalog

    def random(self):
        return self.rng.random()

    def below(self, n):
        """Integer in [0, n)."""
        return int(self.rng.random() * n)

    def pick(self, seq):
        return seq[self.below(len(seq))]

    def ip(self):
        subnet = self.pick(self.catalog.subnets)
        return f"{subnet}.{self.below(255)}.{self.below(255)}"

    def email(self):
        user = self.pick(self.catalog.email_users)
        domain = self.pick(self.catalog.email_domains)
        return f"{user}@{domain}"


EMAIL_DOMAINS = ("example.com", "company.org", "internal.net", "corp.io", "staging.dev")
EMAIL_USERS = ("admin", "ops", "billing", "support", "alerts", "devops", "security", "sre")
SUBNETS = ("10.0", "172.16", "192.168", "10.1", "172.31")

ENDPOINTS = ("/api/v1/users", "/api/v1/orders", "/api/v1/products")
CACHE_OPS = ("GET", "SET", "DELETE")


# ─── Structured templates (basic / k8s) ──────────────────────────────────────
STRUCTURED_TEMPLATES = (
    template(
        "INFO", "User authentication successful", "auth-service",
        action="login",
        result="success",
    ),
    template(
        "ERROR", "Database connection timeout", "database",
        error_code="DB_TIMEOUT",
        query_time_ms=lambda d: d.below(3000) + 3000,
        retry_count=lambda d: d.below(3) + 1,
    ),
    template(
        "WARN", "High memory usage detected", "monitoring",
        memory_pct=lambda d: d.below(20) + 75,
        cpu_pct=lambda d: d.below(30) + 60,
        threshold_exceeded=True,
    ),
    template(
        "INFO", "API request processed", "api-gateway",
        endpoint=lambda d: d.pick(ENDPOINTS),
        method="GET",
        status_code=200,
        response_time_ms=lambda d: d.below(500),
    ),
    template(
        "DEBUG", "Cache operation completed", "cache-service",
        cache_key=lambda d: f"user:session:{d.below(10000)}",
        operation=lambda d: d.pick(CACHE_OPS),
        backend="redis",
        ttl_seconds=3600,
    ),
    template(
        "ERROR", "Payment processing failed", "payment-service",
        error_code="PAYMENT_DECLINED",
        amount=lambda d: f"{d.random() * 1000:.2f}",
        currency="USD",
        retry_allowed=True,
    ),
    template(
        "INFO", "Order created successfully", "order-service",
        order_id=lambda d: f"ORD-{d.below(1000000)}",
        items_count=lambda d: d.below(10) + 1,
        total_amount=lambda d: f"{d.random() * 5000:.2f}",
    ),
    template(
        "WARN", "Rate limit approaching threshold", "api-gateway",
        client_id=lambda d: f"client-{d.below(100)}",
        current_requests=lambda d: d.below(200) + 800,
        limit=1000,
        window_seconds=60,
    ),
)


# ─── Redaction templates (staging) ───────────────────────────────────────────
def _api_request_message(d):
    endpoint = d.pick(ENDPOINTS)
    return (f"API request processed {endpoint} from {d.ip()} by {d.email()} "
            f"status=200 latency={d.below(500)}ms")


REDACTION_TEMPLATES = (
    template(
        "INFO",
        lambda d: f"User authentication successful from {d.ip()} contact {d.email()}",
        "auth-service",
        action="login",
        result="success",
    ),
    template(
        "ERROR",
        lambda d: (f"Database connection timeout from {d.ip()} reported to {d.email()} "
                   f"after {d.below(3000) + 3000}ms"),
        "database",
        error_code="DB_TIMEOUT",
        retry_count=lambda d: d.below(3) + 1,
    ),
    template(
        "WARN",
        lambda d: (f"High memory usage detected on {d.ip()} alert sent to {d.email()} "
                   f"memory={d.below(20) + 75}%"),
        "monitoring",
        threshold_exceeded=True,
    ),
    template(
        "INFO", _api_request_message, "api-gateway",
        method="GET",
        status_code=200,
    ),
    template(
        "DEBUG",
        lambda d: (f"Cache operation completed key=user:session:{d.below(10000)} "
                   f"from {d.ip()} op={d.pick(CACHE_OPS)}"),
        "cache-service",
        backend="redis",
        ttl_seconds=3600,
    ),
    template(
        "ERROR",
        lambda d: (f"Payment processing failed for ${d.random() * 1000:.2f} from {d.ip()} "
                   f"notify {d.email()} error_code=PAYMENT_DECLINED"),
        "payment-service",
        error_code="PAYMENT_DECLINED",
        currency="USD",
        retry_allowed=True,
    ),
    template(
        "INFO",
        lambda d: (f"Order ORD-{d.below(1000000)} created from {d.ip()} "
                   f"confirmation sent to {d.email()} items={d.below(10) + 1}"),
        "order-service",
    ),
    template(
        "WARN",
        lambda d: (f"Rate limit approaching threshold from {d.ip()} client {d.email()} "
                   f"requests={d.below(200) + 800}/1000"),
        "api-gateway",
        window_seconds=60,
    ),
)


SHORT_HOSTS = ("web-01", "web-02", "api-01", "api-02", "worker-01", "worker-02")

SERVICE_HOSTS = (
    "auth-service-prod-01",
    "auth-service-prod-02",
    "api-gateway-prod-01",
    "api-gateway-prod-02",
    "database-primary",
    "database-replica-01",
    "cache-redis-01",
    "cache-redis-02",
    "payment-service-01",
    "order-service-01",
    "monitoring-collector-01",
)


def build_catalog(name, source="hec-loadtest"):
    """Return the catalog for one of the known profiles."""
    if name == "basic":
        templates, hosts = STRUCTURED_TEMPLATES, SHORT_HOSTS
    elif name == "k8s":
        templates, hosts = STRUCTURED_TEMPLATES, SERVICE_HOSTS
    elif name == "staging":
        templates, hosts = REDACTION_TEMPLATES, SERVICE_HOSTS
    else:
        raise ConfigError(f"Unknown catalog '{name}'")
    return Catalog(
        name=name,
        templates=templates,
        hosts=hosts,
        email_users=EMAIL_USERS,
        email_domains=EMAIL_DOMAINS,
        subnets=SUBNETS,
        source=source,
    )
