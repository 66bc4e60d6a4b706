from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict

import aiohttp
import requests
from web3.exceptions import (
    ContractLogicError,
    ProviderConnectionError,
    TimeExhausted,
    Web3Exception,
    Web3RPCError,
)

# Node error messages that mean "the transaction itself would revert".
REVERT_SIGNATURES = (
    "Transaction execution error.",
    "gas required exceeds allowance or always failing transaction",
)


@dataclass
class AppError(Exception):
    code: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


@dataclass
class TransportError(AppError):
    """RPC transport or node failure. Fatal; never retried here."""

    code: str = "transport_error"
    message: str = "RPC transport failure"
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SimulationReverted(AppError):
    """The node reports that the simulated transaction would revert."""

    code: str = "simulation_reverted"
    message: str = "Transaction simulation reverted"
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TxParamsValidationError(AppError):
    code: str = "invalid_tx_params"
    message: str = "Invalid transaction parameters"
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class InvalidRecipient(TxParamsValidationError):
    code: str = "invalid_recipient"
    message: str = "Invalid recipient address"
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class NegativeValue(TxParamsValidationError):
    code: str = "negative_value"
    message: str = "Invalid transaction value: not a positive number"
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class NonIntegerValue(TxParamsValidationError):
    code: str = "non_integer_value"
    message: str = "Invalid transaction value: number must be in wei"
    data: Dict[str, Any] = field(default_factory=dict)


def is_revert_message(message: str) -> bool:
    return any(sig in (message or "") for sig in REVERT_SIGNATURES)


def classify_exception(e: BaseException) -> AppError:
    """
    Map common web3 / network issues into stable error codes.
    """
    if isinstance(e, AppError):
        return e

    msg = str(e)

    # Reverts first: some nodes report them through generic RPC errors.
    if isinstance(e, ContractLogicError):
        return SimulationReverted(message=msg, data={"source": "contract_logic_error"})
    if isinstance(e, (Web3RPCError, ValueError)) and is_revert_message(msg):
        return SimulationReverted(message=msg, data={"source": "rpc_error"})

    if isinstance(e, (ProviderConnectionError, TimeExhausted)):
        return TransportError(message=msg, data={"source": "provider"})
    if isinstance(e, (aiohttp.ClientError, requests.exceptions.RequestException)):
        return TransportError(message=msg, data={"source": "http"})
    if isinstance(e, (asyncio.TimeoutError, TimeoutError, ConnectionError)):
        return TransportError(message=msg, data={"source": "network"})
    if isinstance(e, (Web3RPCError, Web3Exception)):
        return TransportError(code="rpc_error", message=msg, data={"source": "rpc_error"})

    return AppError("unknown_error", msg, {})
