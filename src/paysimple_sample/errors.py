"""
Exceptions raised by the sample.

Only `GatewayError` is ever inspected by the workflow. Anything else that
escapes an iteration is treated as opaque and printed in full.
"""

from http import HTTPStatus

from paysimple_sample.domain.models import ErrorMessage


class PaySimpleSampleError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(PaySimpleSampleError):
    """A required setting is absent or blank."""

    def __init__(self, key: str, source: str) -> None:
        self.key = key
        self.source = source
        super().__init__(f"{key} is missing from {source}")


class GatewayError(PaySimpleSampleError):
    """The gateway answered with a non-success HTTP status.

    `errors` holds the field-level messages from the response envelope and
    is only populated for rejected requests (typically 400).
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        errors: list[ErrorMessage] | None = None,
        error_code: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.errors = list(errors or [])
        self.error_code = error_code
        super().__init__(f"{status_code}: {message}")

    @property
    def is_not_found(self) -> bool:
        return self.status_code == HTTPStatus.NOT_FOUND

    @property
    def is_validation(self) -> bool:
        return self.status_code == HTTPStatus.BAD_REQUEST
