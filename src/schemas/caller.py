"""Caller identity passed explicitly to authorization checks."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Caller:
    """
    Lightweight identity of the user making a request.

    Built by the caller's authentication layer (or `user_service.get_caller`)
    and handed to every authorization check. An unauthenticated request is
    represented by `None` rather than a Caller.
    """

    id: str
    is_demo: bool = False


def caller_id(caller: Caller | None) -> str:
    """Return the caller's user ID, or an empty string if unauthenticated."""
    if caller is None:
        return ""
    return caller.id
