from __future__ import annotations

import os
from typing import Dict, Optional

import aiohttp
from web3 import AsyncHTTPProvider, AsyncWeb3

CHAIN_ID_BY_NAME: Dict[str, int] = {
    "ethereum": 1,
    "base": 8453,
    "arbitrum": 42161,
    "optimism": 10,
}


def _env(name: str) -> Optional[str]:
    v = os.getenv(name)
    if v is None:
        return None
    v = v.strip()
    return v or None


def rpc_url_for(chain: str) -> str:
    """
    Resolve RPC URL for a chain.

    Env precedence (chain=ethereum -> ETHEREUM):
    - EVM_RPC_URL_<CHAIN>
    - RPC_URL_<CHAIN>
    """
    c = (chain or "").strip().lower()
    key = c.upper()
    url = _env(f"EVM_RPC_URL_{key}") or _env(f"RPC_URL_{key}")
    if not url:
        raise ValueError(
            f"Missing RPC URL for chain '{chain}'. Set EVM_RPC_URL_{key} (or RPC_URL_{key})."
        )
    return url


def async_web3_for_url(url: str, *, timeout_sec: float = 10.0) -> AsyncWeb3:
    timeout = aiohttp.ClientTimeout(total=float(timeout_sec))
    return AsyncWeb3(AsyncHTTPProvider(url, request_kwargs={"timeout": timeout}))


def get_async_web3(chain: str, *, timeout_sec: float = 10.0) -> AsyncWeb3:
    # Not cached: an AsyncHTTPProvider session is bound to the event loop that first uses it.
    return async_web3_for_url(rpc_url_for(chain), timeout_sec=timeout_sec)


def is_hex_address(s: str) -> bool:
    v = (s or "").strip()
    if not (v.startswith("0x") and len(v) == 42):
        return False
    try:
        int(v[2:], 16)
        return True
    except ValueError:
        return False
