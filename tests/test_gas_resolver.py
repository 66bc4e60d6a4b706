import pytest

from gas.models import TransactionMeta, TransactionParams
from gas.resolver import BUFFERED_GAS, GasLimitResolver, add_gas_buffer
from quantities import GasAmount


@pytest.mark.parametrize(
    "initial, ceiling",
    [
        (9_000_001, 10_000_000),
        (30_000_000, 30_000_000),
        (50_000_000, 30_000_000),
        (1, 0),
    ],
)
def test_estimate_above_upper_bound_is_kept(initial, ceiling):
    assert add_gas_buffer(GasAmount(initial), GasAmount(ceiling)) == initial


@pytest.mark.parametrize("initial", [0, 21000, 53_000, 8_999_999, 9_000_000])
def test_estimate_under_upper_bound_becomes_fixed_buffer(initial):
    # upper = 9_000_000 > 21000, so the limit is 21000 itself, not initial + 21000
    assert add_gas_buffer(GasAmount(initial), GasAmount(10_000_000)) == 21000


@pytest.mark.parametrize(
    "ceiling, upper",
    [
        (23_333, 20_999),
        (23_334, 21_000),
        (10_000, 9_000),
        (0, 0),
    ],
)
def test_small_ceiling_falls_back_to_upper_bound(ceiling, upper):
    assert add_gas_buffer(GasAmount(upper), GasAmount(ceiling)) == upper
    assert add_gas_buffer(GasAmount(0), GasAmount(ceiling)) == upper


def test_buffer_uses_floor_division_on_large_values():
    ceiling = GasAmount(2**200 + 7)
    upper = (2**200 + 7) * 9 // 10
    assert add_gas_buffer(GasAmount(upper + 1), ceiling) == upper + 1
    assert add_gas_buffer(GasAmount(upper), ceiling) == BUFFERED_GAS


def test_resolve_keeps_caller_specified_gas():
    meta = TransactionMeta(tx_params=TransactionParams(gas=GasAmount(50_000)), gas_limit_specified=True)
    GasLimitResolver().resolve(meta, GasAmount(10_000_000), GasAmount(30_000))

    assert meta.tx_params.gas == 50_000
    assert meta.estimated_gas == 50_000


def test_resolve_keeps_specified_gas_above_block_ceiling():
    meta = TransactionMeta(tx_params=TransactionParams(gas=GasAmount(40_000_000)), gas_limit_specified=True)
    GasLimitResolver().resolve(meta, GasAmount(30_000_000), GasAmount(25_000))

    assert meta.tx_params.gas == 40_000_000
    assert meta.estimated_gas == 40_000_000


def test_resolve_buffers_unspecified_gas():
    meta = TransactionMeta(tx_params=TransactionParams(gas=GasAmount(9_500_000)))
    GasLimitResolver().resolve(meta, GasAmount(10_000_000), GasAmount(9_000_000))

    assert meta.estimated_gas == 9_000_000
    assert meta.tx_params.gas == 21000
    assert meta.tx_params.gas.to_hex() == "0x5208"
