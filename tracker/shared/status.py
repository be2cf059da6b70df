import logging
from enum import Enum
from typing import Optional, TypeVar

logger = logging.getLogger(__name__)

StatusT = TypeVar("StatusT", bound=Enum)


def coerce_status(status_enum: type[StatusT], value: object) -> Optional[StatusT]:
    """
    Convert a stored status into a member of a workflow status enum.

    Args:
        status_enum: The workflow's status enum, e.g. ExpenseStatus
        value: Raw status value from the record

    Returns:
        The matching member, or None for missing or unrecognised values.
        Guards treat None as a state in which nothing is permitted.
    """
    if value is None:
        return None
    if isinstance(value, status_enum):
        return value
    try:
        return status_enum(value)
    except ValueError:
        logger.debug(f"Unrecognised {status_enum.__name__} value: {value!r}")
        return None
