from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from quantities import GasAmount

_KNOWN_KEYS = {"to", "value", "data", "gas", "gasLimit"}


@dataclass(frozen=True)
class Block:
    gas_limit: GasAmount
    number: Optional[int] = None
    hash: Optional[str] = None


@dataclass
class TransactionParams:
    """
    Caller-owned transaction fields. The gas pipeline only ever writes `gas`,
    the validator may drop `to`.

    Fields it does not interpret (from, nonce, gasPrice, chainId, ...) ride
    along in `extra` and are sent to the node unchanged.
    """

    to: Optional[str] = None
    value: Optional[Union[str, int]] = None
    data: Optional[str] = None
    gas: Optional[GasAmount] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __setattr__(self, name: str, value: Any) -> None:
        # gas is hex on the wire; callers may assign "0x.." strings at any time
        if name == "gas" and value is not None:
            value = GasAmount.parse(value)
        super().__setattr__(name, value)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "TransactionParams":
        gas = d.get("gas")
        if gas is None:
            gas = d.get("gasLimit")
        return cls(
            to=d.get("to"),
            value=d.get("value"),
            data=d.get("data"),
            gas=gas,
            extra={k: v for k, v in d.items() if k not in _KNOWN_KEYS},
        )

    def to_rpc_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        if self.to is not None:
            out["to"] = self.to
        if self.value is not None:
            out["value"] = self.value
        if self.data is not None:
            out["data"] = self.data
        if self.gas is not None:
            out["gas"] = self.gas.to_hex()
        return out


@dataclass
class TransactionMeta:
    tx_params: TransactionParams
    gas_limit_specified: bool = False
    estimated_gas: Optional[GasAmount] = None
    simulation_fails: bool = False
    id: str = field(default_factory=lambda: secrets.token_hex(8))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "txParams": self.tx_params.to_rpc_dict(),
            "gasLimitSpecified": self.gas_limit_specified,
            "estimatedGas": self.estimated_gas.to_hex() if self.estimated_gas is not None else None,
            "simulationFails": self.simulation_fails,
        }
