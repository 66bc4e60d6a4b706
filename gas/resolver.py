from __future__ import annotations

from gas.models import TransactionMeta
from observability import build_log_context, log_event
from quantities import GasAmount

RESOLVER_CTX = build_log_context(tool="gas_resolver")

# Keep the limit at or below 90% of the block ceiling.
UPPER_NUMERATOR = 9
UPPER_DENOMINATOR = 10
# Intrinsic cost of a plain transfer.
BUFFERED_GAS = GasAmount(21000)


def add_gas_buffer(initial_gas: GasAmount, block_gas_ceiling: GasAmount) -> GasAmount:
    """
    Recommended gas limit for an estimate.

    - an estimate above 90% of the ceiling is returned as-is
    - otherwise the limit is the fixed 21000, when that fits under 90% of the ceiling
    - otherwise 90% of the ceiling

    Note the second branch returns 21000 itself, not estimate + 21000.
    """
    initial = GasAmount.parse(initial_gas)
    upper = GasAmount.parse(block_gas_ceiling).mul_fraction(UPPER_NUMERATOR, UPPER_DENOMINATOR)

    if initial > upper:
        return initial
    if BUFFERED_GAS < upper:
        return BUFFERED_GAS
    return upper


class GasLimitResolver:
    def resolve(self, tx_meta: TransactionMeta, block_gas_ceiling: GasAmount, estimated_gas: GasAmount) -> None:
        tx_meta.estimated_gas = GasAmount.parse(estimated_gas)
        tx_params = tx_meta.tx_params

        # An explicit limit is authoritative; the estimate is informational.
        if tx_meta.gas_limit_specified:
            tx_meta.estimated_gas = tx_params.gas
            return

        tx_params.gas = add_gas_buffer(tx_meta.estimated_gas, block_gas_ceiling)
        log_event(
            "gas_resolved",
            ctx=build_log_context(**RESOLVER_CTX, tx_id=tx_meta.id),
            data={"estimated_gas": tx_meta.estimated_gas.to_hex(), "gas": tx_params.gas.to_hex()},
        )
