from __future__ import annotations
import time
from typing import Callable, List, Optional, Tuple

from devchain import metrics, networks
from devchain.errors import classify_exception
from devchain.logger import logger
from devchain.mode import OperatingMode, VALID_NETWORKS, expected_chain_id
from devchain.probe import ChainProbe
from devchain.report import AccountView, DiagnosticReport, Outcome

CheckOutput = Tuple[Outcome, str]


def execute_check(report: DiagnosticReport, suite: str, name: str,
                  fn: Callable[[], CheckOutput]) -> None:
    """Run one check and append exactly one entry, whatever happens inside it."""
    t0 = time.monotonic()
    try:
        outcome, detail = fn()
    except Exception as e:
        ce = classify_exception(e)
        metrics.inc_probe_error(ce.status)
        outcome, detail = Outcome.FAIL, ce.detail()
    metrics.observe_check(max(0.0, time.monotonic() - t0))
    metrics.inc_check(suite, name, outcome.value)
    report.add(name, outcome, detail)
    if outcome is Outcome.FAIL:
        logger.warning("[%s] %s FAIL %s", suite, name, detail)
    else:
        logger.info("[%s] %s %s %s", suite, name, outcome.value, detail)


def _check_network_name(mode: OperatingMode, network_name: Optional[str]) -> CheckOutput:
    if not network_name:
        return Outcome.SKIPPED, "no declared network name supplied"
    allowed = VALID_NETWORKS[mode]
    if network_name in allowed:
        return Outcome.PASS, network_name
    return Outcome.FAIL, f"'{network_name}' is not valid for {mode.value} (expected {', '.join(sorted(allowed))})"


def _check_chain_id(mode: OperatingMode, probe: ChainProbe) -> CheckOutput:
    chain_id = probe.get_network_id()
    expected = expected_chain_id(mode)
    if chain_id == expected:
        return Outcome.PASS, f"chain id {chain_id}"
    return Outcome.FAIL, f"chain id {chain_id}, expected {expected}"


def _check_block_height(mode: OperatingMode, probe: ChainProbe) -> CheckOutput:
    height = probe.get_block_height()
    if not isinstance(height, int) or height < 0:
        return Outcome.FAIL, f"invalid block height {height!r}"
    if mode is OperatingMode.REMOTE_TEST and height <= networks.REMOTE_MIN_BLOCK_HEIGHT:
        return Outcome.FAIL, f"height {height} <= {networks.REMOTE_MIN_BLOCK_HEIGHT}, not a live test network"
    if mode is OperatingMode.FORKED and height < networks.FORK_BLOCK_NUMBER:
        return Outcome.FAIL, f"height {height} below fork block {networks.FORK_BLOCK_NUMBER}"
    return Outcome.PASS, f"height {height}"


def _check_accounts(probe: ChainProbe, report: DiagnosticReport) -> CheckOutput:
    addresses = probe.list_accounts()
    views: List[AccountView] = []
    for addr in addresses[:networks.ACCOUNT_VIEW_LIMIT]:
        views.append(AccountView(address=addr, balance=probe.get_balance(addr)))
    report.accounts = views
    if not addresses:
        return Outcome.FAIL, "no signer accounts available"
    return Outcome.PASS, f"{len(addresses)} account(s)"


def _check_fork_liveness(mode: OperatingMode, probe: ChainProbe) -> CheckOutput:
    if mode is OperatingMode.LOCAL:
        return Outcome.SKIPPED, "local chain has no external state"
    if mode is OperatingMode.REMOTE_TEST:
        return Outcome.SKIPPED, "fork liveness applies to forked mode only"
    balance = probe.get_balance(networks.FORK_LIVENESS_ADDRESS)
    if balance > 0:
        return Outcome.PASS, f"{networks.FORK_LIVENESS_ADDRESS} holds {balance} wei"
    return Outcome.FAIL, f"{networks.FORK_LIVENESS_ADDRESS} has zero balance: fork is not serving mainnet state"


CHECK_NAMES = ("network-name", "chain-id", "block-height", "accounts", "fork-liveness")


def run(mode: OperatingMode, probe: ChainProbe,
        network_name: Optional[str] = None) -> DiagnosticReport:
    """Run every diagnostic check in order. Never raises; always len(CHECK_NAMES) entries."""
    report = DiagnosticReport(title="diagnostics", mode=mode.value)
    steps = (
        ("network-name", lambda: _check_network_name(mode, network_name)),
        ("chain-id", lambda: _check_chain_id(mode, probe)),
        ("block-height", lambda: _check_block_height(mode, probe)),
        ("accounts", lambda: _check_accounts(probe, report)),
        ("fork-liveness", lambda: _check_fork_liveness(mode, probe)),
    )
    for name, fn in steps:
        execute_check(report, "diagnostics", name, fn)
    return report
