"""Operating mode resolution.

Single decision point for "which chain are we talking to". Everything
downstream consumes the returned ``OperatingMode`` and never looks at raw
configuration again.

Decision order (first match wins):
    1. declared network is the remote test network -> REMOTE_TEST
    2. declared network is the simulated default and a usable
       provider key is present                     -> FORKED
    3. anything else that is a known network      -> LOCAL

Unknown network names raise ``ConfigurationError``.
"""
from __future__ import annotations
from enum import Enum
from typing import List, Optional, Tuple

from devchain import networks
from devchain.config import ConfigSnapshot
from devchain.errors import ConfigurationError


class OperatingMode(str, Enum):
    LOCAL = "local"
    FORKED = "forked"
    REMOTE_TEST = "remote-test"


# Declared network names that are consistent with each mode
VALID_NETWORKS = {
    OperatingMode.LOCAL: frozenset({networks.SIMULATED_DEFAULT, networks.LOCALHOST}),
    OperatingMode.FORKED: frozenset({networks.SIMULATED_DEFAULT}),
    OperatingMode.REMOTE_TEST: frozenset({networks.REMOTE_TEST}),
}


def has_valid_provider_key(config: ConfigSnapshot) -> bool:
    key = config.provider_api_key
    return bool(key) and key != networks.PLACEHOLDER_API_KEY


def resolve(config: ConfigSnapshot) -> OperatingMode:
    network = config.declared_network
    if network not in networks.KNOWN_NETWORKS:
        known = ", ".join(sorted(networks.KNOWN_NETWORKS))
        raise ConfigurationError(f"unknown network '{network}' (expected one of: {known})")
    if network == networks.REMOTE_TEST:
        return OperatingMode.REMOTE_TEST
    if network == networks.SIMULATED_DEFAULT and has_valid_provider_key(config):
        return OperatingMode.FORKED
    return OperatingMode.LOCAL


def expected_chain_id(mode: OperatingMode) -> int:
    if mode is OperatingMode.REMOTE_TEST:
        return networks.REMOTE_TEST_CHAIN_ID
    return networks.SIMULATED_CHAIN_ID


def config_warnings(config: ConfigSnapshot, mode: OperatingMode) -> List[str]:
    """Configuration gaps worth telling the operator about. Never changes the mode."""
    warnings: List[str] = []
    if mode is OperatingMode.REMOTE_TEST:
        if not config.signing_key:
            warnings.append("SEPOLIA_PRIVATE_KEY is not set: no signer available on sepolia")
        if not has_valid_provider_key(config) and not config.remote_rpc_url:
            warnings.append("ALCHEMY_API_KEY is not set and no SEPOLIA_RPC_URL override: provider URL is incomplete")
        return warnings

    if config.provider_api_key == networks.PLACEHOLDER_API_KEY:
        warnings.append("ALCHEMY_API_KEY still holds the placeholder value: fork disabled")
    elif has_valid_provider_key(config) and config.declared_network == networks.LOCALHOST:
        warnings.append("forking applies only to the hardhat network: localhost runs without a fork")
    return warnings


def resolve_with_warnings(config: ConfigSnapshot) -> Tuple[Optional[OperatingMode], List[str]]:
    try:
        mode = resolve(config)
    except ConfigurationError as e:
        return None, [f"configuration-error: {e}"]
    return mode, config_warnings(config, mode)


def describe(mode: OperatingMode) -> str:
    if mode is OperatingMode.REMOTE_TEST:
        return "Remote test network (sepolia)"
    if mode is OperatingMode.FORKED:
        return f"Forked mainnet at block {networks.FORK_BLOCK_NUMBER} (Alchemy provider)"
    return "Local simulated chain (no API key needed)"
