from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from errors import InvalidRecipient, NegativeValue, NonIntegerValue, TxParamsValidationError
from observability import build_log_context, log_event

if TYPE_CHECKING:
    from gas.models import TransactionParams

VALIDATOR_CTX = build_log_context(tool="tx_validator")

# Recipient values that mean "no recipient".
EMPTY_RECIPIENTS = ("0x", "")


def validate_recipient(tx_params: "TransactionParams") -> "TransactionParams":
    """
    A missing recipient is only acceptable for contract creation (data present);
    in that case `to` is dropped entirely.
    """
    if tx_params.to in EMPTY_RECIPIENTS:
        if tx_params.data:
            tx_params.to = None
        else:
            raise InvalidRecipient(data={"to": tx_params.to})
    return tx_params


def validate_value(tx_params: "TransactionParams") -> None:
    if tx_params.value is None:
        return
    value = str(tx_params.value)
    if "-" in value:
        raise NegativeValue(
            message=f"Invalid transaction value of {tx_params.value} not a positive number.",
            data={"value": value},
        )
    if "." in value:
        raise NonIntegerValue(
            message=f"Invalid transaction value of {tx_params.value} number must be in wei",
            data={"value": value},
        )


class TransactionParamValidator:
    """
    Structural checks on transaction params, independent of gas logic.

    Rules run in order; a recipient already dropped by the first rule stays
    dropped when a later rule fails.
    """

    def validate(self, tx_params: "TransactionParams") -> "TransactionParams":
        try:
            validate_recipient(tx_params)
            validate_value(tx_params)
        except TxParamsValidationError as e:
            log_event(
                "tx_params_invalid",
                ctx=VALIDATOR_CTX,
                data={"code": e.code, "error": e.message},
                level=logging.WARNING,
            )
            raise
        return tx_params
