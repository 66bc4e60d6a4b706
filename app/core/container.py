from __future__ import annotations

from typing import Optional

from app.core.settings import Settings, settings
from execution.evm import async_web3_for_url
from execution.transport import RpcTransport, Web3Transport
from gas import TxGasUtils
from observability import configure_logging


class Container:
    """
    Wires settings -> transport -> gas pipeline. Nothing connects until the
    transport is first requested.
    """

    def __init__(self, cfg: Optional[Settings] = None, transport: Optional[RpcTransport] = None):
        self.settings = cfg or settings
        self._transport = transport
        self._tx_gas_utils: Optional[TxGasUtils] = None

        # Observability; an explicit cfg replaces whatever was configured before
        configure_logging(
            self.settings.READYGAS_LOG_LEVEL,
            json_lines=self.settings.READYGAS_LOG_JSON,
            service_name=self.settings.READYGAS_SERVICE_NAME,
            force=cfg is not None,
        )

    @property
    def transport(self) -> RpcTransport:
        if self._transport is None:
            self._transport = self._build_transport()
        return self._transport

    @property
    def tx_gas_utils(self) -> TxGasUtils:
        if self._tx_gas_utils is None:
            self._tx_gas_utils = TxGasUtils(self.transport)
        return self._tx_gas_utils

    def _build_transport(self) -> RpcTransport:
        timeout = self.settings.HTTP_TIMEOUT_SEC
        if self.settings.RPC_URL:
            return Web3Transport(async_web3_for_url(self.settings.RPC_URL, timeout_sec=timeout))
        return Web3Transport.for_chain(self.settings.CHAIN, timeout_sec=timeout)


global_container = Container()
