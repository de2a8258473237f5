import json

from devchain.report import AccountView, CheckResult, DiagnosticReport, Outcome


def test_report_keeps_order_and_reduces_ok():
    r = DiagnosticReport(title="diagnostics", mode="local")
    r.add("chain-id", Outcome.PASS, "chain id 31337")
    r.add("fork-liveness", Outcome.SKIPPED, "local chain has no external state")
    assert [e.check_name for e in r] == ["chain-id", "fork-liveness"]
    assert r.ok is True  # skips never count against the run
    r.add("block-height", Outcome.FAIL, "probe-timeout: block_number")
    assert r.ok is False
    assert len(r) == 3
    assert r.count(Outcome.FAIL) == 1
    assert r.get("block-height").detail.startswith("probe-timeout")
    assert r.get("missing") is None


def test_entries_are_immutable_snapshots():
    r = DiagnosticReport()
    entry = r.add("chain-id", Outcome.PASS)
    assert isinstance(entry, CheckResult)
    try:
        entry.outcome = Outcome.FAIL  # type: ignore[misc]
    except Exception as e:
        assert e.__class__.__name__ == "FrozenInstanceError"
    else:
        raise AssertionError("entries must be frozen")
    entries = r.entries
    r.add("block-height", Outcome.PASS)
    assert len(entries) == 1 and len(r.entries) == 2


def test_render_and_dict():
    r = DiagnosticReport(title="smoke", mode="remote-test")
    r.warn("SEPOLIA_PRIVATE_KEY is not set")
    r.add("value-transfer", Outcome.SKIPPED, "mutating check disabled on a shared remote network")
    r.accounts = [AccountView(address="0xabc", balance=1500000000000000000)]
    text = r.render()
    assert "[WARN] SEPOLIA_PRIVATE_KEY" in text
    assert "[SKIPPED] value-transfer" in text
    assert "1.5 ETH" in text
    assert "skipped=1" in text
    d = json.loads(json.dumps(r.to_dict()))
    assert d["ok"] is True
    assert d["checks"][0] == {"check": "value-transfer", "outcome": "SKIPPED",
                              "detail": "mutating check disabled on a shared remote network"}
    assert d["accounts"][0]["balance"] == 1500000000000000000
