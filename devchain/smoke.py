"""Smoke-test suite for a resolved environment.

A declarative list of small assertions, each tagged with the modes it applies
to. A check outside its modes is recorded as SKIPPED with the reason, so the
report always has one entry per declared check. Mutating checks (value
transfer, time travel, mining) only run on simulated chains: on the remote
test network they would spend real funds on a shared chain.

Check functions raise ``AssertionError`` through ``_expect`` on an unmet
expectation (bare ``assert`` is stripped under ``-O``); the runner records it
as FAIL and moves on.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, FrozenSet, Optional, Tuple

from web3 import Web3

from devchain import networks
from devchain.diagnostics import execute_check
from devchain.mode import OperatingMode, expected_chain_id
from devchain.probe import ChainProbe
from devchain.report import DiagnosticReport, Outcome

ALL_MODES: FrozenSet[OperatingMode] = frozenset(OperatingMode)
SIMULATED_MODES: FrozenSet[OperatingMode] = frozenset({OperatingMode.LOCAL, OperatingMode.FORKED})


@dataclass(frozen=True)
class SmokeContext:
    mode: OperatingMode
    probe: ChainProbe
    network_name: Optional[str] = None


@dataclass(frozen=True)
class SmokeCheck:
    name: str
    concern: str
    fn: Callable[[SmokeContext], str]
    modes: FrozenSet[OperatingMode] = ALL_MODES
    mutating: bool = False
    needs_network_name: bool = False


def _expect(cond: bool, msg: str) -> None:
    if not cond:
        raise AssertionError(msg)


def _network_name(ctx: SmokeContext) -> str:
    _expect(ctx.network_name in networks.KNOWN_NETWORKS,
            f"network '{ctx.network_name}' not in {sorted(networks.KNOWN_NETWORKS)}")
    return ctx.network_name


def _chain_id(ctx: SmokeContext) -> str:
    chain_id = ctx.probe.get_network_id()
    expected = expected_chain_id(ctx.mode)
    _expect(chain_id == expected, f"chain id {chain_id} != {expected}")
    return f"chain id {chain_id}"


def _block_number(ctx: SmokeContext) -> str:
    height = ctx.probe.get_block_height()
    _expect(isinstance(height, int), f"block number is {type(height).__name__}, not int")
    _expect(height >= 0, f"negative block number {height}")
    return f"block {height}"


def _signer_count(ctx: SmokeContext) -> str:
    accounts = ctx.probe.list_accounts()
    minimum = networks.REMOTE_MIN_SIGNERS if ctx.mode is OperatingMode.REMOTE_TEST else networks.LOCAL_MIN_SIGNERS
    _expect(len(accounts) >= minimum, f"{len(accounts)} signer(s), need at least {minimum}")
    return f"{len(accounts)} signer(s)"


def _balance_threshold(ctx: SmokeContext) -> str:
    accounts = ctx.probe.list_accounts()
    if ctx.mode is OperatingMode.REMOTE_TEST:
        _expect(bool(accounts), "no signer account")
        balance = ctx.probe.get_balance(accounts[0])
        _expect(balance > networks.REMOTE_MIN_BALANCE_WEI,
                f"primary balance {Web3.from_wei(balance, 'ether')} ETH <= 0.01 ETH")
        return f"primary holds {Web3.from_wei(balance, 'ether')} ETH"

    funded = accounts[:networks.LOCAL_FUNDED_ACCOUNTS]
    _expect(len(funded) == networks.LOCAL_FUNDED_ACCOUNTS, f"only {len(funded)} account(s) to check")
    for i, addr in enumerate(funded):
        balance = ctx.probe.get_balance(addr)
        _expect(balance > networks.LOCAL_MIN_BALANCE_WEI,
                f"account {i} holds {Web3.from_wei(balance, 'ether')} ETH <= 1000 ETH")
    return f"first {len(funded)} accounts hold > 1000 ETH"


def _unit_conversion(ctx: SmokeContext) -> str:
    one = Web3.to_wei(1, "ether")
    _expect(one == networks.ETHER, f"1 ether parsed as {one} wei")
    _expect(Web3.from_wei(one, "ether") == 1, "1e18 wei did not format back to 1 ether")
    return "1 ether == 10**18 wei"


def _transfer_skeleton(ctx: SmokeContext) -> dict:
    accounts = ctx.probe.list_accounts()
    _expect(bool(accounts), "no sender account")
    if ctx.mode is OperatingMode.REMOTE_TEST:
        return {"from": accounts[0], "to": networks.REMOTE_GAS_TARGET,
                "value": networks.REMOTE_GAS_VALUE_WEI}
    _expect(len(accounts) >= 2, "need two accounts for a local transfer")
    return {"from": accounts[0], "to": accounts[1], "value": networks.LOCAL_TRANSFER_VALUE_WEI}


def _gas_estimate(ctx: SmokeContext) -> str:
    gas = ctx.probe.estimate_gas(_transfer_skeleton(ctx))
    _expect(gas > 0, f"gas estimate {gas} is not positive")
    _expect(gas < networks.GAS_ESTIMATE_CEILING, f"gas estimate {gas} >= {networks.GAS_ESTIMATE_CEILING}")
    return f"{gas} gas"


def _value_transfer(ctx: SmokeContext) -> str:
    tx = _transfer_skeleton(ctx)
    before = ctx.probe.get_balance(tx["to"])
    ctx.probe.send_transaction(tx)
    after = ctx.probe.get_balance(tx["to"])
    _expect(after - before == tx["value"], f"receiver delta {after - before} wei != {tx['value']} wei")
    return "receiver credited 1 ETH"


def _advance_time(ctx: SmokeContext) -> str:
    t0 = ctx.probe.latest_timestamp()
    _expect(t0 > 0, f"latest block timestamp {t0} is not positive")
    ctx.probe.advance_time(networks.TIME_ADVANCE_SEC)
    ctx.probe.mine_block()
    t1 = ctx.probe.latest_timestamp()
    _expect(t1 - t0 >= networks.TIME_ADVANCE_SEC, f"time advanced {t1 - t0}s < {networks.TIME_ADVANCE_SEC}s")
    return f"time advanced {t1 - t0}s"


def _mine_block(ctx: SmokeContext) -> str:
    h0 = ctx.probe.get_block_height()
    ctx.probe.mine_block()
    h1 = ctx.probe.get_block_height()
    _expect(h1 == h0 + 1, f"height {h0} -> {h1}, expected {h0 + 1}")
    return f"height {h0} -> {h1}"


def _mode_verification(ctx: SmokeContext) -> str:
    if ctx.mode is OperatingMode.REMOTE_TEST:
        height = ctx.probe.get_block_height()
        _expect(height > networks.REMOTE_MIN_BLOCK_HEIGHT, f"sepolia height {height} too low")
        chain_id = ctx.probe.get_network_id()
        _expect(chain_id == networks.REMOTE_TEST_CHAIN_ID, f"chain id {chain_id} is not sepolia")
        return f"sepolia height {height}"
    if ctx.mode is OperatingMode.FORKED:
        balance = ctx.probe.get_balance(networks.FORK_LIVENESS_ADDRESS)
        _expect(balance > 0, "fork liveness address has zero balance")
        return f"fork serves mainnet state ({Web3.from_wei(balance, 'ether')} ETH)"
    height = ctx.probe.get_block_height()
    _expect(height >= 0, f"negative block number {height}")
    return f"local height {height}"


CHECKS: Tuple[SmokeCheck, ...] = (
    SmokeCheck("network-name", "network identity", _network_name, needs_network_name=True),
    SmokeCheck("chain-id", "network identity", _chain_id),
    SmokeCheck("block-number", "network identity", _block_number),
    SmokeCheck("signer-count", "account provisioning", _signer_count),
    SmokeCheck("balance-threshold", "balance thresholds", _balance_threshold),
    SmokeCheck("unit-conversion", "tooling", _unit_conversion),
    SmokeCheck("gas-estimate", "gas estimation bounds", _gas_estimate),
    SmokeCheck("value-transfer", "mutation", _value_transfer, SIMULATED_MODES, mutating=True),
    SmokeCheck("advance-time", "mutation", _advance_time, SIMULATED_MODES, mutating=True),
    SmokeCheck("mine-block", "mutation", _mine_block, SIMULATED_MODES, mutating=True),
    SmokeCheck("mode-verification", "network identity", _mode_verification),
)


def _skip_reason(check: SmokeCheck, mode: OperatingMode) -> str:
    if check.mutating and mode is OperatingMode.REMOTE_TEST:
        return "mutating check disabled on a shared remote network"
    return f"not applicable in {mode.value} mode"


def _as_step(check: SmokeCheck, ctx: SmokeContext) -> Callable[[], Tuple[Outcome, str]]:
    def step() -> Tuple[Outcome, str]:
        if ctx.mode not in check.modes:
            return Outcome.SKIPPED, _skip_reason(check, ctx.mode)
        if check.needs_network_name and not ctx.network_name:
            return Outcome.SKIPPED, "no declared network name supplied"
        return Outcome.PASS, check.fn(ctx)
    return step


def run(mode: OperatingMode, probe: ChainProbe,
        network_name: Optional[str] = None) -> DiagnosticReport:
    ctx = SmokeContext(mode=mode, probe=probe, network_name=network_name)
    report = DiagnosticReport(title="smoke", mode=mode.value)
    for check in CHECKS:
        execute_check(report, "smoke", check.name, _as_step(check, ctx))
    return report
