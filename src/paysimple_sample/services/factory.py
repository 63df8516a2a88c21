"""
Factory for the gateway services of one session.

Services are created lazily and cached per factory, all sharing a single
`GatewayClient`. The factory is built from an explicit `SessionSettings`
rather than module-level state, so tests can construct as many as they
like. Close it (or use it as an async context manager) to release the
HTTP connection pool.
"""

import httpx

from paysimple_sample.config import SessionSettings
from paysimple_sample.services.customers import CustomerService
from paysimple_sample.services.gateway import GatewayClient
from paysimple_sample.services.payments import PaymentService


class ServiceFactory:
    """Lazily creates and caches service instances for one session."""

    def __init__(self, settings: SessionSettings, *, http_client: httpx.AsyncClient | None = None) -> None:
        self.settings = settings
        self._http_client = http_client
        self._gateway: GatewayClient | None = None
        self._customers: CustomerService | None = None
        self._payments: PaymentService | None = None

    def get_gateway(self) -> GatewayClient:
        if self._gateway is None:
            self._gateway = GatewayClient(self.settings, client=self._http_client)
        return self._gateway

    def get_customer_service(self) -> CustomerService:
        if self._customers is None:
            self._customers = CustomerService(self.get_gateway())
        return self._customers

    def get_payment_service(self) -> PaymentService:
        if self._payments is None:
            self._payments = PaymentService(self.get_gateway())
        return self._payments

    async def close(self) -> None:
        if self._gateway is not None:
            await self._gateway.close()

    async def __aenter__(self) -> "ServiceFactory":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
