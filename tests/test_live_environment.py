"""Smoke suite against a real node. Opt in with DEVCHAIN_LIVE=1 (node on LOCAL_RPC_URL, or sepolia settings)."""
import os

import pytest

from devchain import diagnostics, smoke
from devchain.config import load_config_snapshot
from devchain.mode import resolve
from devchain.probe import build_probe
from devchain.report import Outcome

pytestmark = pytest.mark.skipif(os.getenv("DEVCHAIN_LIVE") != "1", reason="DEVCHAIN_LIVE=1 not set")


@pytest.fixture(scope="module")
def live():
    config = load_config_snapshot()
    mode = resolve(config)
    return config, mode, build_probe(config, mode)


def test_live_diagnostics(live):
    config, mode, probe = live
    report = diagnostics.run(mode, probe, config.declared_network)
    print(report.render())
    assert report.ok, [e for e in report if e.outcome is Outcome.FAIL]


def test_live_smoke(live):
    config, mode, probe = live
    report = smoke.run(mode, probe, config.declared_network)
    print(report.render())
    assert report.ok, [e for e in report if e.outcome is Outcome.FAIL]
