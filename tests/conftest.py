import asyncio
import os
import sys

import pytest

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gas.models import Block, TransactionMeta, TransactionParams
from quantities import GasAmount


class FakeTransport:
    """
    In-memory RpcTransport. Set `error` to make estimate_gas raise, or
    `hang=True` to make it block until cancelled.
    """

    def __init__(self, gas_limit=10_000_000, estimate=21000, error=None, block_error=None, hang=False):
        self.block = Block(gas_limit=GasAmount(gas_limit), number=1)
        self.estimate = estimate
        self.error = error
        self.block_error = block_error
        self.hang = hang
        self.block_calls = []
        self.estimate_calls = []
        self.estimate_started = asyncio.Event()

    async def get_block(self, tag, full_transactions):
        self.block_calls.append((tag, full_transactions))
        if self.block_error is not None:
            raise self.block_error
        return self.block

    async def estimate_gas(self, params):
        self.estimate_calls.append(dict(params))
        self.estimate_started.set()
        if self.hang:
            await asyncio.Event().wait()
        if self.error is not None:
            raise self.error
        return self.estimate


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def make_meta():
    def _make(**params):
        return TransactionMeta(tx_params=TransactionParams(**params))

    return _make
