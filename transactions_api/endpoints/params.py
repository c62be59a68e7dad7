"""Shared query parameter decoding."""
from typing import Optional

from fastapi import Query

from transactions_api.exceptions.api_exception import BadRequestError


def month_param(
    month: Optional[str] = Query(
        default=None,
        description="Calendar month of sale, 1 (January) to 12 (December)",
    ),
) -> int:
    """Decode the ``month`` query parameter into an int in [1, 12]."""
    if month is None or not month.strip():
        raise BadRequestError("Month is required.")

    try:
        value = int(month.strip())
    except ValueError:
        raise BadRequestError("Invalid month.")

    if not 1 <= value <= 12:
        raise BadRequestError("Invalid month.")
    return value
