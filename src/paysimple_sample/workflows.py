"""
Interactive payment workflow.

Drives one end-to-end payment attempt per iteration: read a customer id,
look up the customer and their default account, read an amount, submit
the payment, report the outcome. Then ask whether to go again.

Each gateway call is awaited before the next one starts; nothing runs
concurrently and nothing is retried. The user decides whether to retry via
the "make another payment?" prompt.

Fault handling:
  - A lookup fault (customer or account) is reported and ends the process
    after a keypress.
  - A submission fault is reported and ends only the current iteration.
  - Anything else is printed in full (traceback) and ends only the current
    iteration.
"""

import logging
import traceback
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from paysimple_sample.console import Console
from paysimple_sample.domain.models import AccountType, IterationOutcome, PaymentAccount, PaymentRequest
from paysimple_sample.errors import GatewayError
from paysimple_sample.reporting import describe_gateway_error
from paysimple_sample.services.customers import CustomerService
from paysimple_sample.services.payments import PaymentService

logger = logging.getLogger(__name__)

INTRO_LINES = (
    "This is an example of making a payment with an existing customer.",
    "In your production code, the PaySimple customer Id would most likely be stored in your database",
)
FAILURE_HINT = (
    "Note: To simulate a failure enter a payment amount 9999.01 - 9999.29. "
    "For success, enter any other amount."
)
REPEAT_PROMPT = "Would you like to make another payment? Y / N"
EXIT_PROMPT = "Press a key to exit"

# Short form for the not-found message, long form for the selection text.
ACCOUNT_LABELS: dict[AccountType, str] = {
    AccountType.CREDIT_CARD: "credit card",
    AccountType.ACH: "ACH account",
}
ACCOUNT_NOUNS: dict[AccountType, str] = {
    AccountType.CREDIT_CARD: "credit card account",
    AccountType.ACH: "ACH account",
}

CENTS = Decimal("0.01")


def parse_customer_id(text: str) -> int:
    """Parse a customer id. Digit-group underscores are not accepted."""
    if "_" in text:
        raise ValueError(f"Invalid customer id: {text!r}")
    return int(text.strip())


def parse_amount(text: str) -> Decimal:
    """Parse a payment amount. Raises ValueError for anything but a finite number."""
    if "_" in text:
        raise ValueError(f"Invalid payment amount: {text!r}")
    try:
        amount = Decimal(text.strip())
    except InvalidOperation as exc:
        raise ValueError(f"Invalid payment amount: {text!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Invalid payment amount: {text!r}")
    return amount


def format_amount(amount: Decimal) -> str:
    """Dollars with two decimals, halves rounded away from zero."""
    return f"${amount.quantize(CENTS, rounding=ROUND_HALF_UP)}"


class PaymentWorkflow:
    """Console-driven payment loop.

    Execution flow per iteration:
        1. Prompt for customer id        → CustomerService.get_customer
        2. Default account lookup        → CustomerService.get_default_account
        3. Prompt for amount             → PaymentService.create_payment
        4. Print status (and failure details when Failed)
    """

    def __init__(
        self,
        console: Console,
        customers: CustomerService,
        payments: PaymentService,
        *,
        account_type: AccountType = AccountType.CREDIT_CARD,
        collapse_duplicate_errors: bool = False,
    ) -> None:
        self.console = console
        self.customers = customers
        self.payments = payments
        self.account_type = account_type
        self.collapse_duplicate_errors = collapse_duplicate_errors

    # ── Helpers ──────────────────────────────────────────────────

    def _report(self, error: GatewayError, not_found_message: str) -> None:
        for line in describe_gateway_error(
            error, not_found_message, collapse_duplicates=self.collapse_duplicate_errors
        ):
            self.console.write(line)

    def _terminate(self, error: GatewayError, not_found_message: str) -> IterationOutcome:
        self._report(error, not_found_message)
        self.console.read_key(EXIT_PROMPT)
        return IterationOutcome.TERMINATED

    # ── One iteration ────────────────────────────────────────────

    async def run_once(self) -> IterationOutcome:
        for line in INTRO_LINES:
            self.console.write(line)
        customer_id = parse_customer_id(self.console.prompt("Enter PaySimple Customer Id: "))

        # Step 1: make sure the customer exists.
        try:
            customer = await self.customers.get_customer(customer_id)
        except GatewayError as exc:
            logger.info("Customer lookup failed for %s: %s", customer_id, exc)
            return self._terminate(exc, f"Customer with Id {customer_id} does not exist")
        self.console.write(f"Customer {customer.display_name} selected.")

        # Step 2: find the account to charge.
        label = ACCOUNT_LABELS[self.account_type]
        noun = ACCOUNT_NOUNS[self.account_type]
        self.console.write(f"Now selecting the default {noun} for the customer.")
        self.console.write(f"You could also store the {noun} id in your database or add a new one to the customer.")
        try:
            account: PaymentAccount = await self.customers.get_default_account(customer.id, self.account_type)
        except GatewayError as exc:
            logger.info("Default %s lookup failed for %s: %s", label, customer_id, exc)
            return self._terminate(exc, f"Default {label} for customer with Id {customer_id} does not exist")
        self.console.write(account.describe())

        # Step 3: submit the payment.
        self.console.write(FAILURE_HINT)
        amount = parse_amount(self.console.prompt("Enter Payment Amount: "))
        request = PaymentRequest(account_id=account.id, amount=amount)
        self.console.write(f"Making payment for {format_amount(amount)}...")
        try:
            result = await self.payments.create_payment(request)
        except GatewayError as exc:
            logger.info("Payment submission rejected: %s", exc)
            self._report(exc, f"Account {account.id} does not exist")
            return IterationOutcome.FAILED

        # Step 4: report. A decline is a completed call with a Failed status.
        self.console.write(f"Payment {result.id} is in status {result.status or ''}")
        if result.failed and result.failure_data is not None:
            failure = result.failure_data
            self.console.write(
                f"Failure code: '{failure.code}'; Description: '{failure.description}'; "
                f"Corrective Action: '{failure.merchant_action_text}'"
            )
        return IterationOutcome.COMPLETED

    # ── Loop ─────────────────────────────────────────────────────

    async def run(self) -> int:
        """Run iterations until the user declines or a lookup fails.

        Returns the number of iterations started.
        """
        iterations = 0
        while True:
            iterations += 1
            try:
                outcome = await self.run_once()
            except Exception:
                logger.warning("Iteration %d failed with an unexpected error", iterations)
                self.console.write(traceback.format_exc().rstrip())
                outcome = IterationOutcome.FAILED

            if outcome is IterationOutcome.TERMINATED:
                return iterations

            key = self.console.read_key(REPEAT_PROMPT)
            if key not in ("Y", "y"):
                return iterations
            self.console.write()
