from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from web3 import AsyncWeb3

from errors import AppError, TransportError, classify_exception
from execution.evm import get_async_web3, is_hex_address
from gas.models import Block
from observability import build_log_context, log_event
from quantities import GasAmount

TRANSPORT_CTX = build_log_context(tool="rpc_transport")

_QUANTITY_KEYS = ("gas", "value", "gasPrice", "maxFeePerGas", "maxPriorityFeePerGas", "nonce")
_ADDRESS_KEYS = ("to", "from")


class RpcTransport(Protocol):
    """
    What the gas pipeline needs from a node.

    `estimate_gas` raises SimulationReverted when the node says the
    transaction would revert and TransportError for everything transport
    related; nothing else is interpreted by callers.
    """

    async def get_block(self, tag: str, full_transactions: bool) -> Block: ...

    async def estimate_gas(self, params: Dict[str, Any]) -> GasAmount: ...


def to_web3_tx(params: Dict[str, Any]) -> Dict[str, Any]:
    """Hex/decimal quantities -> ints and checksummed addresses, as web3.py expects."""
    tx: Dict[str, Any] = {}
    for k, v in params.items():
        if v is None:
            continue
        if k in _QUANTITY_KEYS:
            tx[k] = int(GasAmount.parse(v))
        elif k in _ADDRESS_KEYS and isinstance(v, str) and is_hex_address(v):
            tx[k] = AsyncWeb3.to_checksum_address(v)
        else:
            tx[k] = v
    return tx


class Web3Transport:
    """
    RpcTransport backed by web3.py's AsyncWeb3.
    """

    def __init__(self, w3: AsyncWeb3) -> None:
        self._w3 = w3

    @classmethod
    def for_chain(cls, chain: str, *, timeout_sec: float = 10.0) -> "Web3Transport":
        return cls(get_async_web3(chain, timeout_sec=timeout_sec))

    async def get_block(self, tag: str, full_transactions: bool) -> Block:
        try:
            raw = await self._w3.eth.get_block(tag, full_transactions)
        except Exception as e:
            err = self._classify(e, "eth_getBlockByNumber")
            if err is None:
                raise
            raise err from e

        gas_limit = raw.get("gasLimit") if raw is not None else None
        if gas_limit is None:
            raise TransportError(
                message="Malformed block response: missing gasLimit",
                data={"method": "eth_getBlockByNumber", "tag": tag},
            )
        try:
            ceiling = GasAmount.parse(gas_limit)
        except (TypeError, ValueError) as e:
            raise TransportError(
                message=f"Malformed block response: gasLimit={gas_limit!r}",
                data={"method": "eth_getBlockByNumber", "tag": tag},
            ) from e

        block_hash = raw.get("hash")
        return Block(
            gas_limit=ceiling,
            number=raw.get("number"),
            hash=AsyncWeb3.to_hex(block_hash) if block_hash is not None else None,
        )

    async def estimate_gas(self, params: Dict[str, Any]) -> GasAmount:
        tx = to_web3_tx(params)
        try:
            result = await self._w3.eth.estimate_gas(tx)
        except Exception as e:
            err = self._classify(e, "eth_estimateGas")
            if err is None:
                raise
            raise err from e
        try:
            return GasAmount.parse(result)
        except (TypeError, ValueError) as e:
            raise TransportError(
                message=f"Malformed estimateGas response: {result!r}",
                data={"method": "eth_estimateGas"},
            ) from e

    def _classify(self, e: Exception, method: str) -> Optional[AppError]:
        err = classify_exception(e)
        if err.code == "unknown_error":
            # not ours to interpret
            return None
        err.data.setdefault("method", method)
        log_event(
            "rpc_error",
            ctx=TRANSPORT_CTX,
            data={"method": method, "code": err.code, "error": err.message},
            level=logging.DEBUG,
        )
        return err
