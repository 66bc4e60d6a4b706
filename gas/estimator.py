from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from errors import SimulationReverted, TransportError
from gas.models import TransactionMeta
from observability import build_log_context, log_event
from quantities import GasAmount

if TYPE_CHECKING:
    from execution.transport import RpcTransport

ESTIMATOR_CTX = build_log_context(tool="gas_estimator")

# Exploratory gas for an unspecified limit: 95% of the block ceiling.
EXPLORATORY_NUMERATOR = 19
EXPLORATORY_DENOMINATOR = 20


def exploratory_gas(block_gas_ceiling: GasAmount) -> GasAmount:
    return GasAmount.parse(block_gas_ceiling).mul_fraction(EXPLORATORY_NUMERATOR, EXPLORATORY_DENOMINATOR)


class GasEstimator:
    """
    Simulates a transaction on the node and classifies the outcome.

    The simulator needs some gas value, so an absent limit is replaced with
    an exploratory one. Writes to the meta happen only once the node has
    answered; a cancelled or fatally failed call leaves the meta untouched.
    """

    def __init__(self, transport: "RpcTransport") -> None:
        self._transport = transport

    async def estimate(self, tx_meta: TransactionMeta, block_gas_ceiling: GasAmount) -> Optional[GasAmount]:
        """
        Returns the node's estimate, or None when the simulation reverted
        (then `tx_meta.simulation_fails` is set). Any other error propagates.
        """
        ctx = build_log_context(**ESTIMATOR_CTX, tx_id=tx_meta.id)
        tx_params = tx_meta.tx_params
        gas_limit_specified = tx_params.gas is not None
        sim_gas = tx_params.gas if gas_limit_specified else exploratory_gas(block_gas_ceiling)

        params = tx_params.to_rpc_dict()
        params["gas"] = sim_gas.to_hex()
        if not gas_limit_specified:
            log_event("gas_exploratory", ctx=ctx, data={"gas": params["gas"]}, level=logging.DEBUG)

        try:
            raw = await self._transport.estimate_gas(params)
        except SimulationReverted as e:
            self._commit(tx_meta, gas_limit_specified, sim_gas)
            tx_meta.simulation_fails = True
            log_event(
                "gas_simulation_failed",
                ctx=ctx,
                data={"gas_limit_specified": gas_limit_specified, "gas": sim_gas.to_hex(), "error": e.message},
                level=logging.WARNING,
            )
            return None

        try:
            estimated = GasAmount.parse(raw)
        except (TypeError, ValueError) as e:
            raise TransportError(
                message=f"Malformed estimateGas response: {raw!r}",
                data={"method": "eth_estimateGas"},
            ) from e

        self._commit(tx_meta, gas_limit_specified, sim_gas)
        log_event(
            "gas_estimate",
            ctx=ctx,
            data={"gas_limit_specified": gas_limit_specified, "gas": sim_gas.to_hex(), "estimated_gas": estimated.to_hex()},
        )
        return estimated

    @staticmethod
    def _commit(tx_meta: TransactionMeta, gas_limit_specified: bool, sim_gas: GasAmount) -> None:
        tx_meta.gas_limit_specified = gas_limit_specified
        if not gas_limit_specified:
            tx_meta.tx_params.gas = sim_gas
