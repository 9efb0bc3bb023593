# harness.py

"""
Glue between the synthesizer and Locust.

Nothing here imports locust: it only touches the objects Locust hands in
(the user's HttpSession, a catch_response context, the Environment), so it
can be exercised with plain stand-ins.
"""

import json

from hecload.submit import SubmitOutcome, is_success


def post_envelope(client, url, envelope, headers, timeout):
    """
    POST one envelope through a Locust HttpSession and mark the request
    as a success or failure by the HEC pass/fail check.
    """
    with client.post(
        url,
        data=json.dumps(envelope),
        headers=headers,
        timeout=timeout,
        name="/services/collector",
        catch_response=True,
    ) as response:
        outcome = SubmitOutcome(response.status_code, response.text)
        if is_success(outcome.status, outcome.body):
            response.success()
        else:
            response.failure(f"status={outcome.status} body={(outcome.body or '')[:100]}")
    return outcome


def evaluate_thresholds(stats, thresholds):
    """Return (passed, message) for the run's aggregated stats."""
    p95 = stats.get_response_time_percentile(0.95) or 0

    if stats.fail_ratio >= thresholds.max_fail_ratio:
        return False, (f"THRESHOLD FAILED: error rate {stats.fail_ratio:.2%} "
                       f">= {thresholds.max_fail_ratio:.2%}")
    if p95 >= thresholds.p95_ms:
        return False, f"THRESHOLD FAILED: p95 {p95:.0f}ms >= {thresholds.p95_ms:.0f}ms"
    return True, f"Thresholds passed: error rate {stats.fail_ratio:.2%}, p95 {p95:.0f}ms"


def check_thresholds(environment, thresholds):
    """Print the verdict and set exit code 1 on a breach."""
    passed, message = evaluate_thresholds(environment.stats.total, thresholds)
    print(message)
    if not passed:
        environment.process_exit_code = 1
    return passed
