"""
Payment service facade.

Submits a payment against an existing account. A rejected request raises
`GatewayError`; an accepted one returns a `PaymentResult` whose status may
still be Failed (a decline is a successful call with a failed payment).
"""

import logging

from paysimple_sample.domain.models import PaymentRequest, PaymentResult
from paysimple_sample.services.gateway import GatewayClient

logger = logging.getLogger(__name__)


class PaymentService:
    """Creates payments. Never retries."""

    def __init__(self, gateway: GatewayClient) -> None:
        self.gateway = gateway

    async def create_payment(self, request: PaymentRequest) -> PaymentResult:
        logger.info("Submitting payment of %s against account %s", request.amount, request.account_id)
        payload = await self.gateway.post("/payment", request.model_dump(mode="json", by_alias=True))
        result = PaymentResult.model_validate(payload)
        logger.info("Payment %s is in status %s", result.id, result.status)
        return result
