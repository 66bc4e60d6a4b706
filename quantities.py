from __future__ import annotations

from typing import Any


class GasAmount(int):
    """
    Unsigned arbitrary-precision quantity (gas or wei).

    Always serialized as minimal lowercase hex at the RPC boundary
    (21000 -> "0x5208"). Fractions are applied with floor division only.
    """

    def __new__(cls, value: Any = 0) -> "GasAmount":
        if isinstance(value, (bool, float)):
            raise TypeError(f"GasAmount does not accept {type(value).__name__}")
        if isinstance(value, str):
            value = _parse_quantity_str(value)
        n = int(value)
        if n < 0:
            raise ValueError(f"GasAmount must be non-negative, got {n}")
        return super().__new__(cls, n)

    @classmethod
    def parse(cls, value: Any) -> "GasAmount":
        if isinstance(value, GasAmount):
            return value
        return cls(value)

    def to_hex(self) -> str:
        return hex(self)

    def mul_fraction(self, numerator: int, denominator: int) -> "GasAmount":
        if denominator <= 0:
            raise ValueError("denominator must be > 0")
        return GasAmount(int(self) * int(numerator) // int(denominator))

    def __repr__(self) -> str:
        return f"GasAmount({self.to_hex()})"


def _parse_quantity_str(s: str) -> int:
    v = s.strip()
    if not v:
        raise ValueError("empty quantity")
    if v.lower().startswith("0x"):
        digits = v[2:]
        # "0x" alone is the RPC encoding of zero
        return int(digits, 16) if digits else 0
    return int(v, 10)
