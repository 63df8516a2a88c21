"""
CLI entry point: make payments against existing PaySimple customers.

Loads credentials, builds the gateway services, and runs the interactive
payment loop until the user declines to continue.

Usage:
    # Use ./paysimple.env and charge the default credit card:
    python -m paysimple_sample.client

    # Another settings file, charge the default bank account instead:
    python -m paysimple_sample.client --config sandbox.env --account-type ach

    # Show gateway calls as they happen:
    python -m paysimple_sample.client --verbose
"""

import argparse
import asyncio
import logging

from paysimple_sample.config import DEFAULT_CONFIG_FILE, load_settings
from paysimple_sample.console import Console, TerminalConsole
from paysimple_sample.domain.models import AccountType
from paysimple_sample.errors import ConfigurationError
from paysimple_sample.services.factory import ServiceFactory
from paysimple_sample.workflows import PaymentWorkflow


async def run_client(args: argparse.Namespace, console: Console | None = None) -> int:
    """Run the payment loop. Returns the process exit status."""
    logger = logging.getLogger(__name__)
    console = console or TerminalConsole()

    try:
        settings = load_settings(args.config)
    except ConfigurationError as exc:
        # Nothing has been started yet; report and leave quietly.
        console.write(str(exc))
        return 0

    logger.info("Using gateway %s as %s", settings.api_url, settings.username)

    async with ServiceFactory(settings) as services:
        workflow = PaymentWorkflow(
            console,
            services.get_customer_service(),
            services.get_payment_service(),
            account_type=AccountType(args.account_type),
            collapse_duplicate_errors=args.collapse_duplicate_errors,
        )
        iterations = await workflow.run()

    logger.info("Finished after %d iteration(s)", iterations)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Make a payment for an existing PaySimple customer")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE, help="Settings file with Username, ApiKey and ApiUrl")
    parser.add_argument(
        "--account-type",
        default=AccountType.CREDIT_CARD.value,
        choices=[t.value for t in AccountType],
        help="Which default account to charge",
    )
    parser.add_argument(
        "--collapse-duplicate-errors",
        action="store_true",
        help="Print each named field error once instead of twice",
    )
    parser.add_argument("--verbose", action="store_true", help="Log gateway calls at INFO level")
    return parser


def main() -> int:
    args = build_parser().parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return asyncio.run(run_client(args))


if __name__ == "__main__":
    raise SystemExit(main())
