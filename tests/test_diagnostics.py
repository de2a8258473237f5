import pytest

from chain_stubs import ETH, StubChain, dead_chain, forked_chain, local_chain, remote_chain
from devchain import diagnostics, networks
from devchain.mode import OperatingMode
from devchain.report import Outcome


def outcomes(report):
    return {e.check_name: e.outcome for e in report}


def test_local_scenario_passes_and_skips_fork_liveness():
    chain = local_chain(height=0)
    report = diagnostics.run(OperatingMode.LOCAL, chain, "hardhat")
    assert [e.check_name for e in report] == list(diagnostics.CHECK_NAMES)
    o = outcomes(report)
    assert o["network-name"] is Outcome.PASS
    assert o["chain-id"] is Outcome.PASS
    assert o["block-height"] is Outcome.PASS
    assert o["accounts"] is Outcome.PASS
    assert o["fork-liveness"] is Outcome.SKIPPED
    assert report.ok is True
    # no query for the liveness address on a local chain
    assert chain.calls.count("get_balance") == networks.ACCOUNT_VIEW_LIMIT
    assert len(report.accounts) == networks.ACCOUNT_VIEW_LIMIT
    assert report.accounts[0].balance == 10_000 * ETH


def test_remote_scenario():
    report = diagnostics.run(OperatingMode.REMOTE_TEST, remote_chain(height=5_123_456), "sepolia")
    o = outcomes(report)
    assert o["chain-id"] is Outcome.PASS
    assert o["block-height"] is Outcome.PASS
    assert o["fork-liveness"] is Outcome.SKIPPED
    assert report.ok is True
    assert len(report.accounts) == 1


def test_remote_height_too_low_fails():
    report = diagnostics.run(OperatingMode.REMOTE_TEST, remote_chain(height=1_000_000), "sepolia")
    assert report.get("block-height").outcome is Outcome.FAIL


def test_forked_liveness_pass_and_zero_balance_fail():
    ok = diagnostics.run(OperatingMode.FORKED, forked_chain(), "hardhat")
    assert ok.get("fork-liveness").outcome is Outcome.PASS
    assert ok.ok is True

    dead_fork = diagnostics.run(OperatingMode.FORKED, forked_chain(liveness_balance=0), "hardhat")
    assert dead_fork.get("fork-liveness").outcome is Outcome.FAIL
    # the failure does not stop other checks
    assert dead_fork.get("chain-id").outcome is Outcome.PASS
    assert dead_fork.ok is False


def test_forked_below_fork_block_fails():
    report = diagnostics.run(OperatingMode.FORKED, forked_chain(height=12), "hardhat")
    assert report.get("block-height").outcome is Outcome.FAIL
    assert str(networks.FORK_BLOCK_NUMBER) in report.get("block-height").detail


def test_wrong_chain_id_fails_but_continues():
    report = diagnostics.run(OperatingMode.LOCAL, local_chain(chain_id=1), "hardhat")
    assert report.get("chain-id").outcome is Outcome.FAIL
    assert "expected 31337" in report.get("chain-id").detail
    assert report.get("block-height").outcome is Outcome.PASS
    assert len(report) == len(diagnostics.CHECK_NAMES)


def test_network_name_mismatch_and_missing():
    report = diagnostics.run(OperatingMode.REMOTE_TEST, remote_chain(), "hardhat")
    assert report.get("network-name").outcome is Outcome.FAIL
    report = diagnostics.run(OperatingMode.LOCAL, local_chain())
    assert report.get("network-name").outcome is Outcome.SKIPPED


def test_forked_mode_rejects_localhost():
    report = diagnostics.run(OperatingMode.FORKED, forked_chain(), "localhost")
    entry = report.get("network-name")
    assert entry.outcome is Outcome.FAIL
    assert "expected hardhat)" in entry.detail
    assert diagnostics.run(OperatingMode.FORKED, forked_chain(), "hardhat").get("network-name").outcome is Outcome.PASS


def test_no_accounts_fails():
    report = diagnostics.run(OperatingMode.REMOTE_TEST, StubChain(chain_id=networks.REMOTE_TEST_CHAIN_ID,
                                                                  height=2_000_000, accounts=[]), "sepolia")
    assert report.get("accounts").outcome is Outcome.FAIL
    assert report.accounts == []


@pytest.mark.parametrize("mode", list(OperatingMode))
def test_dead_probe_never_raises(mode):
    report = diagnostics.run(mode, dead_chain(), "hardhat")
    assert len(report) == len(diagnostics.CHECK_NAMES)
    assert report.ok is False
    for name in ("chain-id", "block-height", "accounts"):
        entry = report.get(name)
        assert entry.outcome is Outcome.FAIL
        assert entry.detail.startswith("probe-unreachable: ")
        assert "ECONNREFUSED" in entry.detail
    if mode is not OperatingMode.FORKED:
        assert report.get("fork-liveness").outcome is Outcome.SKIPPED


def test_unexpected_exception_is_recorded():
    report = diagnostics.run(OperatingMode.LOCAL, StubChain(fail=RuntimeError("decoder exploded")), "hardhat")
    assert report.get("chain-id").outcome is Outcome.FAIL
    assert report.get("chain-id").detail == "unknown-error: RuntimeError: decoder exploded"
