# config.py

"""
Runtime configuration for the HEC load test.

Everything comes from the environment:
    HEC_URL      collector endpoint (default: local stub collector)
    HEC_TOKEN    HEC token, required, there is no fallback
    HEC_PROFILE  basic | k8s | staging (default: basic)
    HEC_TIMEOUT  request timeout in seconds (default: 10)
    HEC_SOURCE   value of the envelope's "source" tag
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple


class ConfigError(ValueError):
    """Raised at startup when configuration is missing or invalid."""


DEFAULT_HEC_URL = "http://localhost:8088/services/collector"
DEFAULT_PROFILE = "basic"
DEFAULT_TIMEOUT = "10"
DEFAULT_SOURCE = "hec-loadtest"


@dataclass(frozen=True)
class Stage:
    duration: int  # seconds
    target: int    # users at the end of the stage


@dataclass(frozen=True)
class Thresholds:
    max_fail_ratio: float = 0.01
    p95_ms: float = 2000


@dataclass(frozen=True)
class Profile:
    name: str
    stages: Tuple[Stage, ...]
    min_wait: float
    max_wait: float
    thresholds: Thresholds = Thresholds()


# basic ramps itself; k8s/staging take users and run time from the command line
PROFILES = {
    "basic": Profile(
        name="basic",
        stages=(
            Stage(30, 10),    # ramp up to 10 users
            Stage(120, 50),   # ramp to 50 users
            Stage(300, 50),   # hold 50 users
            Stage(30, 0),     # ramp down
        ),
        min_wait=0.5,
        max_wait=2.5,
    ),
    # 0.1s wait = ~10 req/sec per user
    "k8s": Profile(name="k8s", stages=(), min_wait=0.1, max_wait=0.1),
    "staging": Profile(name="staging", stages=(), min_wait=0.1, max_wait=0.1),
}


@dataclass(frozen=True)
class Settings:
    url: str
    token: str
    profile: Profile
    timeout: float
    source: str


def get_profile(name):
    try:
        return PROFILES[name]
    except KeyError:
        raise ConfigError(f"Unknown profile '{name}', expected one of {sorted(PROFILES)}") from None


def load_settings(environ: Optional[dict] = None) -> Settings:
    """Read settings from the environment, failing fast on anything missing."""
    env = os.environ if environ is None else environ

    token = env.get("HEC_TOKEN", "").strip()
    if not token:
        raise ConfigError("HEC_TOKEN is not set. Export the collector token before running.")

    raw_timeout = env.get("HEC_TIMEOUT", DEFAULT_TIMEOUT)
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigError(f"HEC_TIMEOUT must be a number, got {raw_timeout!r}") from None
    if timeout <= 0:
        raise ConfigError(f"HEC_TIMEOUT must be positive, got {raw_timeout!r}")

    return Settings(
        url=env.get("HEC_URL", DEFAULT_HEC_URL),
        token=token,
        profile=get_profile(env.get("HEC_PROFILE", DEFAULT_PROFILE)),
        timeout=timeout,
        source=env.get("HEC_SOURCE", DEFAULT_SOURCE),
    )


def target_users(stages, run_time):
    """
    Users the load shape should be running `run_time` seconds into the test.
    Each stage ramps linearly from the previous stage's target to its own.
    Returns None once every stage has elapsed.
    """
    elapsed = 0
    previous = 0
    for stage in stages:
        if run_time < elapsed + stage.duration:
            progress = (run_time - elapsed) / stage.duration
            return round(previous + (stage.target - previous) * progress)
        elapsed += stage.duration
        previous = stage.target
    return None
