# locustfile.py
#
# HEC load test.
#   basic profile (ramps itself):
#     HEC_TOKEN=... locust -f locustfile.py --headless
#   k8s / staging (users and duration from the command line):
#     HEC_PROFILE=k8s HEC_TOKEN=... locust -f locustfile.py --headless -u 1000 -r 100 -t 1h

from locust import HttpUser, LoadTestShape, between, constant, events, task

from hecload import harness
from hecload.catalog import build_catalog
from hecload.config import load_settings, target_users
from hecload.submit import hec_headers, run_iteration
from hecload.synthesizer import EventSynthesizer

SETTINGS = load_settings()
PROFILE = SETTINGS.profile
CATALOG = build_catalog(PROFILE.name, source=SETTINGS.source)
SPAWN_RATE = 10


class HecUser(HttpUser):
    host = SETTINGS.url

    if PROFILE.min_wait == PROFILE.max_wait:
        wait_time = constant(PROFILE.min_wait)
    else:
        wait_time = between(PROFILE.min_wait, PROFILE.max_wait)

    def on_start(self):
        # one synthesizer (and random source) per user
        self.synthesizer = EventSynthesizer(CATALOG)
        self.headers = hec_headers(SETTINGS.token)

    def submit(self, envelope):
        return harness.post_envelope(self.client, SETTINGS.url, envelope, self.headers, SETTINGS.timeout)

    @task
    def send_event(self):
        run_iteration(self.synthesizer, self.submit)


if PROFILE.stages:
    class StagedRamp(LoadTestShape):
        stages = PROFILE.stages

        def tick(self):
            users = target_users(self.stages, self.get_run_time())
            if users is None:
                return None
            return users, SPAWN_RATE


@events.quitting.add_listener
def check_thresholds(environment, **kwargs):
    harness.check_thresholds(environment, PROFILE.thresholds)
