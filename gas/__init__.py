from .analyzer import TxGasUtils, analyze_gas_usage, validate_tx_params
from .estimator import GasEstimator, exploratory_gas
from .inspector import BlockGasInspector
from .models import Block, TransactionMeta, TransactionParams
from .resolver import BUFFERED_GAS, GasLimitResolver, add_gas_buffer

__all__ = [
    "Block",
    "TransactionMeta",
    "TransactionParams",
    "BlockGasInspector",
    "GasEstimator",
    "GasLimitResolver",
    "TxGasUtils",
    "BUFFERED_GAS",
    "add_gas_buffer",
    "analyze_gas_usage",
    "exploratory_gas",
    "validate_tx_params",
]
