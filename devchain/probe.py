"""Chain access.

``ChainProbe`` is the narrow interface the diagnostics and smoke suites talk
to. ``Web3ChainProbe`` backs it with web3.py over JSON-RPC; tests use an
in-memory stub instead.

Every failure leaving a probe is a ``ProbeError`` subclass so callers can
record it without knowing which transport was used.
"""
from __future__ import annotations
import abc
from typing import Any, Callable, Dict, List, Optional, TypeVar

import requests
from eth_account import Account
from web3 import Web3
from web3.exceptions import Web3Exception

from devchain import networks
from devchain.config import ConfigSnapshot
from devchain.errors import ProbeError, ProbeTimeout, ProbeUnreachable
from devchain.logger import logger
from devchain.mode import OperatingMode

T = TypeVar("T")


class ChainProbe(abc.ABC):
    @abc.abstractmethod
    def get_network_id(self) -> int: ...

    @abc.abstractmethod
    def get_block_height(self) -> int: ...

    @abc.abstractmethod
    def get_balance(self, address: str) -> int: ...

    @abc.abstractmethod
    def estimate_gas(self, tx: Dict[str, Any]) -> int: ...

    @abc.abstractmethod
    def advance_time(self, seconds: int) -> None: ...

    @abc.abstractmethod
    def mine_block(self) -> None: ...

    @abc.abstractmethod
    def list_accounts(self) -> List[str]: ...

    @abc.abstractmethod
    def latest_timestamp(self) -> int: ...

    @abc.abstractmethod
    def send_transaction(self, tx: Dict[str, Any]) -> str:
        """Send and wait for inclusion; returns the transaction hash."""


class Web3ChainProbe(ChainProbe):
    def __init__(self, w3: Web3, signer_key: Optional[str] = None, receipt_timeout: int = 60):
        self.w3 = w3
        self.signer_key = signer_key
        self.receipt_timeout = receipt_timeout

    @classmethod
    def from_url(cls, url: str, timeout: int, signer_key: Optional[str] = None) -> "Web3ChainProbe":
        provider = Web3.HTTPProvider(url, request_kwargs={"timeout": timeout})
        return cls(Web3(provider), signer_key=signer_key, receipt_timeout=timeout)

    def _call(self, label: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except ProbeError:
            raise
        except requests.exceptions.Timeout as e:
            raise ProbeTimeout(f"{label}: request timed out ({e})") from e
        except requests.exceptions.ConnectionError as e:
            raise ProbeUnreachable(f"{label}: endpoint unreachable ({e})") from e
        except (Web3Exception, ValueError, TypeError, KeyError) as e:
            raise ProbeError(f"{label}: {e}") from e

    def _rpc(self, method: str, params: List[Any]) -> Any:
        resp = self.w3.provider.make_request(method, params)
        if isinstance(resp, dict) and resp.get("error"):
            err = resp["error"]
            msg = err.get("message", err) if isinstance(err, dict) else err
            raise ProbeError(f"{method} rejected: {msg}")
        return resp.get("result") if isinstance(resp, dict) else resp

    def get_network_id(self) -> int:
        return int(self._call("chain_id", lambda: self.w3.eth.chain_id))

    def get_block_height(self) -> int:
        return int(self._call("block_number", lambda: self.w3.eth.block_number))

    def get_balance(self, address: str) -> int:
        checksum = Web3.to_checksum_address(address)
        return int(self._call("get_balance", lambda: self.w3.eth.get_balance(checksum)))

    def estimate_gas(self, tx: Dict[str, Any]) -> int:
        return int(self._call("estimate_gas", lambda: self.w3.eth.estimate_gas(tx)))

    def advance_time(self, seconds: int) -> None:
        self._call("evm_increaseTime", lambda: self._rpc("evm_increaseTime", [int(seconds)]))

    def mine_block(self) -> None:
        self._call("evm_mine", lambda: self._rpc("evm_mine", []))

    def list_accounts(self) -> List[str]:
        if self.signer_key:
            # Remote networks expose only the account derived from the configured key
            return [self._call("signer", lambda: Account.from_key(self.signer_key).address)]
        return list(self._call("accounts", lambda: self.w3.eth.accounts))

    def latest_timestamp(self) -> int:
        return int(self._call("latest_block", lambda: self.w3.eth.get_block("latest")["timestamp"]))

    def send_transaction(self, tx: Dict[str, Any]) -> str:
        def _send() -> str:
            tx_hash = self.w3.eth.send_transaction(tx)
            self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
            return Web3.to_hex(tx_hash)
        return self._call("send_transaction", _send)


def provider_url(config: ConfigSnapshot, mode: OperatingMode) -> str:
    if mode is OperatingMode.REMOTE_TEST:
        return config.remote_rpc_url or networks.sepolia_url(config.provider_api_key or "")
    # Local and forked both talk to the local node; the node owns the fork
    return config.local_rpc_url


def build_probe(config: ConfigSnapshot, mode: OperatingMode) -> Web3ChainProbe:
    url = provider_url(config, mode)
    signer = config.signing_key if mode is OperatingMode.REMOTE_TEST else None
    logger.debug("probe for %s via %s", mode.value, url.split("/v2/")[0])
    return Web3ChainProbe.from_url(url, timeout=config.rpc_timeout_sec, signer_key=signer)
