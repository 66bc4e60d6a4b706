from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from execution.validation import TransactionParamValidator
from gas.estimator import GasEstimator
from gas.inspector import BlockGasInspector
from gas.models import TransactionMeta, TransactionParams
from gas.resolver import GasLimitResolver, add_gas_buffer
from quantities import GasAmount

if TYPE_CHECKING:
    from execution.transport import RpcTransport


class TxGasUtils:
    """
    Gas analysis for a transaction record before it is signed and sent.

    The transport is injected; nothing here opens connections. Instances hold
    no per-transaction state, so one instance can serve concurrent calls.
    """

    def __init__(self, transport: "RpcTransport") -> None:
        self.transport = transport
        self.inspector = BlockGasInspector(transport)
        self.estimator = GasEstimator(transport)
        self.resolver = GasLimitResolver()
        self.validator = TransactionParamValidator()

    async def analyze_gas_usage(self, tx_meta: TransactionMeta) -> TransactionMeta:
        """
        Fill in `tx_params.gas` and the derived gas fields of `tx_meta`.

        When the node says the transaction would revert, `simulation_fails`
        is set and the meta is returned with the exploratory gas still in
        place. Transport errors propagate.
        """
        block_gas_ceiling = await self.inspector.fetch_gas_ceiling()
        estimated_gas = await self.estimate_tx_gas(tx_meta, block_gas_ceiling)
        if estimated_gas is None:
            return tx_meta
        self.set_tx_gas(tx_meta, block_gas_ceiling, estimated_gas)
        return tx_meta

    async def estimate_tx_gas(self, tx_meta: TransactionMeta, block_gas_ceiling: GasAmount) -> Optional[GasAmount]:
        return await self.estimator.estimate(tx_meta, block_gas_ceiling)

    def set_tx_gas(self, tx_meta: TransactionMeta, block_gas_ceiling: GasAmount, estimated_gas: GasAmount) -> None:
        self.resolver.resolve(tx_meta, block_gas_ceiling, estimated_gas)

    def add_gas_buffer(self, initial_gas: GasAmount, block_gas_ceiling: GasAmount) -> GasAmount:
        return add_gas_buffer(initial_gas, block_gas_ceiling)

    def validate_tx_params(self, tx_params: TransactionParams) -> TransactionParams:
        return self.validator.validate(tx_params)


async def analyze_gas_usage(transport: "RpcTransport", tx_meta: TransactionMeta) -> TransactionMeta:
    return await TxGasUtils(transport).analyze_gas_usage(tx_meta)


def validate_tx_params(tx_params: TransactionParams) -> TransactionParams:
    return TransactionParamValidator().validate(tx_params)
