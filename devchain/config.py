from __future__ import annotations
import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from devchain import networks


def _get_env(env: Mapping[str, str], name: str, default: Optional[str] = None) -> Optional[str]:
    val = env.get(name, default)
    if val is None or str(val).strip() == "":
        return default
    return str(val).strip()


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    try:
        return int(env.get(name, default))
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class ConfigSnapshot:
    """Environment values captured once per run. Secrets stay out of repr."""
    declared_network: str = networks.SIMULATED_DEFAULT
    provider_api_key: Optional[str] = field(default=None, repr=False)
    signing_key: Optional[str] = field(default=None, repr=False)
    verification_api_key: Optional[str] = field(default=None, repr=False)
    local_rpc_url: str = networks.DEFAULT_LOCAL_RPC_URL
    remote_rpc_url: Optional[str] = field(default=None, repr=False)
    rpc_timeout_sec: int = networks.DEFAULT_RPC_TIMEOUT_SEC

    def with_network(self, name: str) -> "ConfigSnapshot":
        return replace(self, declared_network=name.strip().lower())


def load_config_snapshot(environ: Optional[Mapping[str, str]] = None,
                         use_dotenv: bool = True) -> ConfigSnapshot:
    """Build the snapshot from process env (plus .env) or an explicit mapping."""
    if environ is None:
        if use_dotenv:
            # project .env next to where the command runs; existing env wins
            load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ
    network = (_get_env(environ, "HARDHAT_NETWORK", networks.SIMULATED_DEFAULT)
               or networks.SIMULATED_DEFAULT)
    return ConfigSnapshot(
        declared_network=network.lower(),
        provider_api_key=_get_env(environ, "ALCHEMY_API_KEY"),
        signing_key=_get_env(environ, "SEPOLIA_PRIVATE_KEY"),
        verification_api_key=_get_env(environ, "ETHERSCAN_API_KEY"),
        local_rpc_url=_get_env(environ, "LOCAL_RPC_URL", networks.DEFAULT_LOCAL_RPC_URL)
        or networks.DEFAULT_LOCAL_RPC_URL,
        remote_rpc_url=_get_env(environ, "SEPOLIA_RPC_URL"),
        rpc_timeout_sec=_int_env(environ, "RPC_TIMEOUT_SEC", networks.DEFAULT_RPC_TIMEOUT_SEC),
    )
