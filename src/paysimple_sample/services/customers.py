"""
Customer service facade.

Looks up customers and their default payment accounts. Records are owned
by the gateway; this service only reads them. Lookup failures surface as
`GatewayError` (404 when the customer or account does not exist).
"""

import logging

from paysimple_sample.domain.models import AccountType, AchAccount, CreditCardAccount, Customer, PaymentAccount
from paysimple_sample.services.gateway import GatewayClient

logger = logging.getLogger(__name__)


class CustomerService:
    """Reads customers and their default accounts."""

    def __init__(self, gateway: GatewayClient) -> None:
        self.gateway = gateway

    async def get_customer(self, customer_id: int) -> Customer:
        logger.info("Fetching customer %s", customer_id)
        payload = await self.gateway.get(f"/customer/{customer_id}")
        customer = Customer.model_validate(payload)
        logger.info("Fetched customer %s", customer.id)
        return customer

    async def get_default_credit_card_account(self, customer_id: int) -> CreditCardAccount:
        logger.info("Fetching default credit card for customer %s", customer_id)
        payload = await self.gateway.get(f"/customer/{customer_id}/defaultcreditcard")
        return CreditCardAccount.model_validate(payload)

    async def get_default_ach_account(self, customer_id: int) -> AchAccount:
        logger.info("Fetching default ACH account for customer %s", customer_id)
        payload = await self.gateway.get(f"/customer/{customer_id}/defaultach")
        return AchAccount.model_validate(payload)

    async def get_default_account(self, customer_id: int, account_type: AccountType) -> PaymentAccount:
        if account_type is AccountType.ACH:
            return await self.get_default_ach_account(customer_id)
        return await self.get_default_credit_card_account(customer_id)
