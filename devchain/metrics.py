from __future__ import annotations
import os
from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest, write_to_textfile

from devchain.logger import logger


# Module registry
_REG = CollectorRegistry()

CHECKS_TOTAL = Counter(
    "devchain_checks_total", "Check outcomes by suite/check/outcome",
    labelnames=("suite", "check", "outcome"), registry=_REG
)
PROBE_ERRORS_TOTAL = Counter(
    "devchain_probe_errors_total", "Failed checks by classified error status",
    labelnames=("type",), registry=_REG
)
CHECK_LATENCY = Histogram(
    "devchain_check_seconds", "Check latency (seconds)",
    buckets=(0.01, 0.05, 0.1, 0.5, 1, 5, 15, 60), registry=_REG
)


def inc_check(suite: str, check: str, outcome: str) -> None:
    CHECKS_TOTAL.labels(suite=suite, check=check, outcome=outcome).inc()


def inc_probe_error(status: str) -> None:
    PROBE_ERRORS_TOTAL.labels(type=status).inc()


def observe_check(seconds: float) -> None:
    CHECK_LATENCY.observe(seconds)


def write_textfile_if_enabled() -> bool:
    """Dump the registry for node_exporter's textfile collector when METRICS_TEXTFILE is set."""
    path = os.getenv("METRICS_TEXTFILE")
    if not path:
        return False
    try:
        write_to_textfile(path, _REG)
    except OSError as e:
        logger.warning("metrics textfile not written (%s): %s", path, e)
        return False
    return True


# Test helpers
def _generate_latest_text() -> str:
    return generate_latest(_REG).decode("utf-8")


def _reset_for_tests() -> None:
    global _REG, CHECKS_TOTAL, PROBE_ERRORS_TOTAL, CHECK_LATENCY
    _REG = CollectorRegistry()
    CHECKS_TOTAL = Counter("devchain_checks_total", "", ("suite", "check", "outcome"), registry=_REG)
    PROBE_ERRORS_TOTAL = Counter("devchain_probe_errors_total", "", ("type",), registry=_REG)
    CHECK_LATENCY = Histogram("devchain_check_seconds", "", registry=_REG)
