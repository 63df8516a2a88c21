"""Shared fakes: a scripted console and in-memory gateway services."""

from __future__ import annotations

import pytest

from paysimple_sample.config import SessionSettings
from paysimple_sample.domain.models import (
    AccountType,
    CreditCardAccount,
    Customer,
    PaymentRequest,
    PaymentResult,
    PaymentStatus,
)
from paysimple_sample.errors import GatewayError


class ScriptedConsole:
    """Feeds canned answers to prompts and records everything written."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.lines: list[str] = []
        self.prompts: list[str] = []

    def write(self, text: str = "") -> None:
        self.lines.append(text)

    def prompt(self, text: str) -> str:
        self.prompts.append(text)
        if not self.answers:
            raise AssertionError(f"unexpected prompt: {text!r}")
        return self.answers.pop(0)

    def read_key(self, text: str) -> str:
        self.write(text)
        return self.prompt("")[:1]

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


class FakeCustomerService:
    def __init__(
        self,
        customer: Customer | None = None,
        account: CreditCardAccount | None = None,
        customer_error: Exception | None = None,
        account_error: Exception | None = None,
    ) -> None:
        self.customer = customer or Customer(id=42, first_name="Ada", last_name="Lovelace")
        self.account = account or CreditCardAccount(
            id=7, customer_id=42, credit_card_number="************1111", issuer="Visa"
        )
        self.customer_error = customer_error
        self.account_error = account_error
        self.customer_calls: list[int] = []
        self.account_calls: list[tuple[int, AccountType]] = []

    async def get_customer(self, customer_id: int) -> Customer:
        self.customer_calls.append(customer_id)
        if self.customer_error is not None:
            raise self.customer_error
        return self.customer

    async def get_default_account(self, customer_id: int, account_type: AccountType):
        self.account_calls.append((customer_id, account_type))
        if self.account_error is not None:
            raise self.account_error
        return self.account


class FakePaymentService:
    def __init__(self, result: PaymentResult | None = None, error: Exception | None = None) -> None:
        self.result = result or PaymentResult(id=1001, account_id=7, status=PaymentStatus.AUTHORIZED)
        self.error = error
        self.requests: list[PaymentRequest] = []

    async def create_payment(self, request: PaymentRequest) -> PaymentResult:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def settings() -> SessionSettings:
    return SessionSettings(username="APIUser1", api_key="secret-key", api_url="https://gateway.example")


@pytest.fixture
def not_found() -> GatewayError:
    return GatewayError(404, "Not Found")
