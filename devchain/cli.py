"""Command line entry points.

  devchain-check-version        exit 0 on a supported interpreter, 1 otherwise
  devchain-verify [--network N] [--smoke] [--json] [--log-level L]
                                resolve the mode, run diagnostics (and the smoke
                                suite), exit 0 when nothing failed

Environment is read once from the process (and .env) at startup.
"""
from __future__ import annotations
import argparse
import json
from typing import Callable, Dict, List, Optional, Sequence

from devchain import diagnostics, metrics, networks, smoke
from devchain.config import ConfigSnapshot, load_config_snapshot
from devchain.logger import LEVELS, log_exceptions, logger, set_level
from devchain.mode import OperatingMode, describe, has_valid_provider_key, resolve_with_warnings
from devchain.probe import ChainProbe, build_probe
from devchain.report import DiagnosticReport
from devchain.runtime import version_report

ProbeFactory = Callable[[ConfigSnapshot, OperatingMode], ChainProbe]

NEXT_STEPS: Dict[OperatingMode, List[str]] = {
    OperatingMode.LOCAL: [
        "compile the contracts and run the test suite",
        "no network connection or API key is needed in local mode",
        "set ALCHEMY_API_KEY in .env to fork mainnet state",
    ],
    OperatingMode.FORKED: [
        "compile the contracts and run the test suite",
        "tests can interact with real mainnet protocols on the fork",
    ],
    OperatingMode.REMOTE_TEST: [
        "keep the signer funded with test ETH from a sepolia faucet",
        "mutating checks are skipped on sepolia",
    ],
}

TROUBLESHOOTING: Dict[OperatingMode, List[str]] = {
    OperatingMode.LOCAL: [
        "make sure a local node is listening on LOCAL_RPC_URL (npx hardhat node / anvil)",
        "make sure no other process holds port 8545",
        "local mode needs no network connection or API key",
    ],
    OperatingMode.FORKED: [
        "check ALCHEMY_API_KEY in .env",
        "check the network connection",
        f"start the node with forking enabled at block {networks.FORK_BLOCK_NUMBER}",
        "or remove ALCHEMY_API_KEY to fall back to local mode",
    ],
    OperatingMode.REMOTE_TEST: [
        "check ALCHEMY_API_KEY or SEPOLIA_RPC_URL",
        "check SEPOLIA_PRIVATE_KEY and the signer balance",
        "check the network connection",
    ],
}


@log_exceptions("check-version")
def check_version_main(argv: Optional[Sequence[str]] = None) -> int:
    argparse.ArgumentParser(prog="devchain-check-version",
                            description="Check interpreter compatibility").parse_args(argv)
    supported, lines = version_report()
    for line in lines:
        print(line)
    return 0 if supported else 1


def _parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="devchain-verify", description="Verify the development chain environment")
    p.add_argument("--network", help="override HARDHAT_NETWORK (hardhat | localhost | sepolia)")
    p.add_argument("--smoke", action="store_true", help="also run the smoke-test suite")
    p.add_argument("--json", action="store_true", help="print reports as JSON")
    p.add_argument("--log-level", choices=LEVELS, type=str.upper, help="override LOG_LEVEL for this run")
    return p


def _banner(config: ConfigSnapshot, mode: OperatingMode) -> List[str]:
    lines = [f"mode: {describe(mode)}", f"network: {config.declared_network}"]
    if mode is OperatingMode.FORKED and has_valid_provider_key(config):
        # host only; the key is part of the URL path
        lines.append(f"fork source: {networks.fork_url('***')}")
    return lines


def _emit(reports: List[DiagnosticReport], mode: Optional[OperatingMode], as_json: bool) -> None:
    if as_json:
        print(json.dumps({
            "mode": mode.value if mode else None,
            "ok": all(r.ok for r in reports),
            "reports": [r.to_dict() for r in reports],
        }, ensure_ascii=False, indent=2))
        return
    for r in reports:
        print(r.render())
        print()


@log_exceptions("verify")
def verify_main(argv: Optional[Sequence[str]] = None,
                probe_factory: ProbeFactory = build_probe) -> int:
    args = _parser().parse_args(argv)
    if args.log_level:
        set_level(args.log_level)
    config = load_config_snapshot()
    if args.network:
        config = config.with_network(args.network)

    mode, warnings = resolve_with_warnings(config)
    if mode is None:
        report = DiagnosticReport(title="diagnostics")
        for w in warnings:
            report.warn(w)
        _emit([report], None, args.json)
        logger.error("environment verification aborted: %s", "; ".join(warnings))
        return 1

    if not args.json:
        for line in _banner(config, mode):
            print(line)

    probe = probe_factory(config, mode)
    report = diagnostics.run(mode, probe, config.declared_network)
    for w in warnings:
        report.warn(w)
    reports = [report]
    if args.smoke:
        reports.append(smoke.run(mode, probe, config.declared_network))

    _emit(reports, mode, args.json)
    ok = all(r.ok for r in reports)
    if not args.json:
        print("environment verified" if ok else "environment verification failed")
        for hint in (NEXT_STEPS if ok else TROUBLESHOOTING)[mode]:
            print(f"  - {hint}")
    metrics.write_textfile_if_enabled()
    logger.info("verification finished mode=%s ok=%s", mode.value, ok)
    return 0 if ok else 1


def check_version() -> None:
    raise SystemExit(check_version_main())


def verify() -> None:
    raise SystemExit(verify_main())
