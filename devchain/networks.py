# -*- coding: utf-8 -*-
"""
Static network table for the development harness.
- network names and chain ids
- RPC URL templates (Alchemy)
- fork pin and the liveness address used to prove a fork is serving mainnet state
- smoke-test thresholds
"""

from __future__ import annotations
from typing import FrozenSet

# -----------------------------
# Network names
# -----------------------------
SIMULATED_DEFAULT = "hardhat"   # in-process simulated network, forkable
LOCALHOST = "localhost"         # standalone local node
REMOTE_TEST = "sepolia"

KNOWN_NETWORKS: FrozenSet[str] = frozenset({SIMULATED_DEFAULT, LOCALHOST, REMOTE_TEST})

# -----------------------------
# Chain ids
# -----------------------------
SIMULATED_CHAIN_ID = 31337
REMOTE_TEST_CHAIN_ID = 11155111

# -----------------------------
# Provider
# -----------------------------
PLACEHOLDER_API_KEY = "YOUR-FREE-ALCHEMY-KEY"
DEFAULT_LOCAL_RPC_URL = "http://127.0.0.1:8545"
SEPOLIA_URL_TEMPLATE = "https://eth-sepolia.g.alchemy.com/v2/{key}"
MAINNET_URL_TEMPLATE = "https://eth-mainnet.g.alchemy.com/v2/{key}"
DEFAULT_RPC_TIMEOUT_SEC = 60

# Fork pinned for reproducible state
FORK_BLOCK_NUMBER = 18_800_000
# Well-known mainnet account (vitalik.eth); non-zero balance means the fork serves mainnet state
FORK_LIVENESS_ADDRESS = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"

# -----------------------------
# Thresholds
# -----------------------------
ETHER = 10 ** 18
REMOTE_MIN_BLOCK_HEIGHT = 1_000_000
REMOTE_MIN_SIGNERS = 1
LOCAL_MIN_SIGNERS = 10
REMOTE_MIN_BALANCE_WEI = ETHER // 100        # 0.01 ETH
LOCAL_MIN_BALANCE_WEI = 1000 * ETHER
LOCAL_FUNDED_ACCOUNTS = 3
GAS_ESTIMATE_CEILING = 100_000
# Remote gas estimates target a burn-style address so no real account is involved
REMOTE_GAS_TARGET = "0x0000000000000000000000000000000000000001"
REMOTE_GAS_VALUE_WEI = ETHER // 1000         # 0.001 ETH
LOCAL_TRANSFER_VALUE_WEI = ETHER
TIME_ADVANCE_SEC = 3600
ACCOUNT_VIEW_LIMIT = 5


def sepolia_url(api_key: str) -> str:
    return SEPOLIA_URL_TEMPLATE.format(key=api_key)


def fork_url(api_key: str) -> str:
    return MAINNET_URL_TEMPLATE.format(key=api_key)
