"""
Domain models for the gateway entities used by the sample.

All models use Pydantic v2 BaseModel for validation, serialization and
deserialization. The gateway speaks JSON with PascalCase keys
(e.g. "CreditCardNumber"), so every model shares a config whose alias
generator maps our snake_case fields onto those keys. `populate_by_name`
lets tests and callers build models with the Python field names.

Enums inherit from (str, Enum) so they serialize as plain strings in JSON
(e.g. "Failed" instead of {"value": "Failed"}).
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_pascal

GATEWAY_MODEL_CONFIG = ConfigDict(
    alias_generator=to_pascal,
    populate_by_name=True,
    extra="ignore",
)


class GatewayModel(BaseModel):
    model_config = GATEWAY_MODEL_CONFIG


class PaymentStatus(str, Enum):
    """Lifecycle status reported by the gateway for a payment."""

    PENDING = "Pending"
    POSTED = "Posted"
    SETTLED = "Settled"
    FAILED = "Failed"
    VOIDED = "Voided"
    REVERSED = "Reversed"
    REVERSE_POSTED = "ReversePosted"
    CHARGEBACK = "Chargeback"
    CHARGEBACK_POSTED = "ChargebackPosted"
    AUTHORIZED = "Authorized"
    RETURNED = "Returned"
    REFUND_SETTLED = "RefundSettled"

    def __str__(self) -> str:
        return self.value


class IterationOutcome(str, Enum):
    """How one pass through the payment workflow ended."""

    COMPLETED = "COMPLETED"     # Payment submitted and reported (any status)
    FAILED = "FAILED"           # Fault reported; the user may try again
    TERMINATED = "TERMINATED"   # Customer or account lookup failed; process ends


class AccountType(str, Enum):
    """Which default account to look up for a customer."""

    CREDIT_CARD = "credit-card"
    ACH = "ach"


# ── Customers and accounts ───────────────────────────────────────────


class Customer(GatewayModel):
    """A customer record owned by the gateway. Looked up, never mutated."""

    id: int
    first_name: str = ""
    last_name: str = ""
    company: str | None = None
    email: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class CreditCardAccount(GatewayModel):
    """A customer's credit card. `credit_card_number` arrives already masked."""

    id: int
    customer_id: int | None = None
    credit_card_number: str = ""
    issuer: str = ""
    expiration_date: str | None = None
    is_default: bool = False

    def describe(self) -> str:
        return f"Default Credit Card Account {self.issuer} ends in {self.credit_card_number}"


class AchAccount(GatewayModel):
    """A customer's bank account. `account_number` arrives already masked."""

    id: int
    customer_id: int | None = None
    account_number: str = ""
    routing_number: str = ""
    bank_name: str = ""
    is_checking_account: bool = True
    is_default: bool = False

    def describe(self) -> str:
        return f"Default ACH Account {self.bank_name} ends in {self.account_number}"


PaymentAccount = CreditCardAccount | AchAccount


# ── Payments ─────────────────────────────────────────────────────────


class PaymentRequest(GatewayModel):
    """Body of a payment submission. Built fresh per attempt."""

    account_id: int
    # Range checks are left to the gateway so they come back as field errors.
    amount: Decimal

    # The gateway expects a JSON number, not the string pydantic emits for Decimal.
    @field_serializer("amount", when_used="json")
    def _amount_as_number(self, amount: Decimal) -> float:
        return float(amount)


class FailureData(GatewayModel):
    """Why a payment failed, plus the text the merchant should act on."""

    code: str | None = None
    description: str | None = None
    merchant_action_text: str | None = None
    is_decline: bool | None = None


class PaymentResult(GatewayModel):
    """Gateway response to a payment submission."""

    id: int
    account_id: int | None = None
    amount: Decimal | None = None
    # Statuses the gateway adds later are kept as plain strings.
    status: PaymentStatus | str | None = Field(default=None, union_mode="left_to_right")
    failure_data: FailureData | None = None

    @property
    def failed(self) -> bool:
        return self.status == PaymentStatus.FAILED


# ── Error envelope ───────────────────────────────────────────────────


class ErrorMessage(GatewayModel):
    """One field-level error from a rejected request. `field` may be blank."""

    field: str | None = None
    message: str = ""


class ErrorResult(GatewayModel):
    error_code: str | None = None
    error_messages: list[ErrorMessage] = Field(default_factory=list)
    trace_code: str | None = None


class ResponseMeta(GatewayModel):
    errors: ErrorResult | None = None
    http_status: str | None = None
    http_status_code: int | None = None
