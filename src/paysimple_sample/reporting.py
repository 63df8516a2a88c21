"""Turning gateway faults into console text."""

from paysimple_sample.errors import GatewayError


def describe_gateway_error(
    error: GatewayError,
    not_found_message: str,
    *,
    collapse_duplicates: bool = False,
) -> list[str]:
    """Return the lines to print for `error`.

    A 404 becomes `not_found_message`. A 400 lists every field-level error:
    a "Field:... Message:..." line when the field is named, followed by a
    bare "Bad Request: ..." line for every error regardless. That repeats the
    message for named fields; `collapse_duplicates` keeps only the first of
    the two. A 400 without field-level errors falls back to its message.
    Any other status is reported as "{status}: {message}".
    """
    if error.is_not_found:
        return [not_found_message]

    if error.is_validation:
        if not error.errors:
            return [f"Bad Request: {error.message}"]
        lines = []
        for item in error.errors:
            named = bool(item.field and item.field.strip())
            if named:
                lines.append(f"Bad Request. Field:{item.field} Message: {item.message}")
            if not (named and collapse_duplicates):
                lines.append(f"Bad Request: {item.message}")
        return lines

    return [f"{error.status_code}: {error.message}"]
