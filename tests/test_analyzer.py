import pytest
from conftest import FakeTransport

from errors import InvalidRecipient, SimulationReverted, TransportError
from gas import TxGasUtils, analyze_gas_usage, validate_tx_params
from gas.models import TransactionMeta, TransactionParams
from quantities import GasAmount

RECIPIENT = "0x" + "cd" * 20


@pytest.mark.asyncio
async def test_unspecified_gas_resolves_to_fixed_buffer():
    transport = FakeTransport(gas_limit=0x989680, estimate=9_000_000)
    meta = TransactionMeta(tx_params=TransactionParams.from_dict({"to": RECIPIENT, "value": "0x0"}))

    out = await TxGasUtils(transport).analyze_gas_usage(meta)

    assert out is meta
    assert transport.block_calls == [("latest", True)]
    assert transport.estimate_calls[0]["gas"] == hex(9_500_000)
    assert meta.estimated_gas == 9_000_000
    assert meta.tx_params.gas.to_hex() == "0x5208"
    assert meta.simulation_fails is False


@pytest.mark.asyncio
async def test_large_estimate_is_left_alone():
    transport = FakeTransport(gas_limit=10_000_000, estimate=9_200_000)
    meta = TransactionMeta(tx_params=TransactionParams(to=RECIPIENT))

    await TxGasUtils(transport).analyze_gas_usage(meta)

    assert meta.tx_params.gas == 9_200_000


@pytest.mark.asyncio
async def test_specified_gas_is_authoritative():
    transport = FakeTransport(gas_limit=10_000_000, estimate=25_000)
    meta = TransactionMeta(tx_params=TransactionParams.from_dict({"to": RECIPIENT, "gas": "0x186a0"}))

    await analyze_gas_usage(transport, meta)

    assert meta.gas_limit_specified is True
    assert meta.tx_params.gas == 100_000
    assert meta.estimated_gas == 100_000


@pytest.mark.asyncio
async def test_expected_revert_flags_meta_and_keeps_exploratory_gas():
    err = SimulationReverted(message="gas required exceeds allowance or always failing transaction")
    transport = FakeTransport(gas_limit=10_000_000, error=err)
    meta = TransactionMeta(tx_params=TransactionParams(to=RECIPIENT, data="0xdeadbeef"))

    out = await TxGasUtils(transport).analyze_gas_usage(meta)

    assert out.simulation_fails is True
    assert out.tx_params.gas == 9_500_000
    assert out.estimated_gas is None
    assert out.to_dict()["simulationFails"] is True


@pytest.mark.asyncio
async def test_block_fetch_failure_propagates():
    transport = FakeTransport(block_error=TransportError(message="node down"))
    meta = TransactionMeta(tx_params=TransactionParams(to=RECIPIENT))

    with pytest.raises(TransportError):
        await TxGasUtils(transport).analyze_gas_usage(meta)

    assert transport.estimate_calls == []
    assert meta.tx_params.gas is None


@pytest.mark.asyncio
async def test_fatal_simulation_error_propagates():
    transport = FakeTransport(error=TransportError(message="timeout"))
    meta = TransactionMeta(tx_params=TransactionParams(to=RECIPIENT))

    with pytest.raises(TransportError):
        await TxGasUtils(transport).analyze_gas_usage(meta)
    assert meta.simulation_fails is False


def test_add_gas_buffer_is_exposed_on_utils(fake_transport):
    utils = TxGasUtils(fake_transport)
    assert utils.add_gas_buffer(GasAmount(100), GasAmount(10_000_000)) == 21000


def test_validate_tx_params_entry_point():
    params = TransactionParams(to="0x", data="0x6080")
    assert validate_tx_params(params) is params
    assert params.to is None

    with pytest.raises(InvalidRecipient):
        TxGasUtils(FakeTransport()).validate_tx_params(TransactionParams(to=""))


@pytest.mark.asyncio
async def test_hex_gas_set_after_construction_is_authoritative():
    transport = FakeTransport(gas_limit=10_000_000, estimate=25_000)
    meta = TransactionMeta(tx_params=TransactionParams(to=RECIPIENT))
    meta.tx_params.gas = "0x186a0"

    await analyze_gas_usage(transport, meta)

    assert transport.estimate_calls[0]["gas"] == "0x186a0"
    assert meta.gas_limit_specified is True
    assert meta.tx_params.gas == 100_000
    assert meta.estimated_gas == 100_000


@pytest.mark.asyncio
async def test_malformed_estimate_aborts_pipeline_without_writes():
    transport = FakeTransport(gas_limit=10_000_000, estimate="not-a-quantity")
    meta = TransactionMeta(tx_params=TransactionParams(to=RECIPIENT))

    with pytest.raises(TransportError):
        await TxGasUtils(transport).analyze_gas_usage(meta)

    assert meta.tx_params.gas is None
    assert meta.gas_limit_specified is False
    assert meta.estimated_gas is None
