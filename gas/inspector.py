from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gas.models import Block
from observability import build_log_context, log_event
from quantities import GasAmount

if TYPE_CHECKING:
    from execution.transport import RpcTransport

INSPECTOR_CTX = build_log_context(tool="block_inspector")


class BlockGasInspector:
    """Reads the gas ceiling of the latest block. No retries, no caching."""

    def __init__(self, transport: "RpcTransport") -> None:
        self._transport = transport

    async def fetch_latest_block(self) -> Block:
        return await self._transport.get_block("latest", True)

    async def fetch_gas_ceiling(self) -> GasAmount:
        block = await self.fetch_latest_block()
        log_event(
            "block_gas_ceiling",
            ctx=INSPECTOR_CTX,
            data={"block": block.number, "gas_limit": block.gas_limit.to_hex()},
            level=logging.DEBUG,
        )
        return block.gas_limit
