"""
AWS Error Predicates

CloudFormation reports "stack does not exist" and "no updates to perform" as a
generic ValidationError, so these conditions can only be told apart by the
message text. SSO Admin reports a duplicate policy reference as a
ConflictException or, on some endpoints, a message naming it "already
attached". Each condition gets one named predicate; callers never compare
error strings themselves.
"""

from typing import Optional, Tuple

from botocore.exceptions import ClientError

from mintadmin.constants import (
    ALREADY_ATTACHED_PHRASE,
    CONFLICT_ERROR_CODE,
    NO_UPDATES_PHRASE,
    STACK_NOT_FOUND_PHRASES,
    VALIDATION_ERROR_CODE,
)


def _client_error_parts(err: ClientError) -> Tuple[str, str]:
    error = err.response.get("Error", {})
    return error.get("Code", ""), error.get("Message", "")


def is_stack_not_found_error(err: Optional[BaseException]) -> bool:
    """Check if err signals that the named stack does not exist."""
    if err is None:
        return False

    if isinstance(err, ClientError):
        code, message = _client_error_parts(err)
        if code != VALIDATION_ERROR_CODE:
            return False
        return any(phrase in message for phrase in STACK_NOT_FOUND_PHRASES)

    text = str(err)
    return any(phrase in text for phrase in STACK_NOT_FOUND_PHRASES)


def is_no_updates_error(err: Optional[BaseException]) -> bool:
    """Check if err signals that an update would not change the stack."""
    if err is None:
        return False

    if isinstance(err, ClientError):
        code, message = _client_error_parts(err)
        return code == VALIDATION_ERROR_CODE and NO_UPDATES_PHRASE in message

    return NO_UPDATES_PHRASE in str(err)


def is_already_attached_error(err: Optional[BaseException]) -> bool:
    """Check if err signals that a policy reference is already on the permission set."""
    if err is None:
        return False

    if isinstance(err, ClientError):
        code, message = _client_error_parts(err)
        return code == CONFLICT_ERROR_CODE or ALREADY_ATTACHED_PHRASE in message

    return ALREADY_ATTACHED_PHRASE in str(err)
