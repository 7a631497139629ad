"""Typed failures for custody operations.

Every failure is a ``ValidationError`` carrying the usual ``{field: [message]}``
payload, so Protean and the API layer treat it like any other rejected
command. The subclass (and its ``code``) tells the caller what to change:
a different actor, a different asset, or waiting for the right lifecycle stage.
"""

from protean.exceptions import ValidationError


class CustodyError(ValidationError):
    """Base class for all custody rejections."""

    code = "CustodyError"
    field = "custody"

    def __init__(self, message: str, field: str | None = None):
        super().__init__({field or self.field: [message]})
        self.message = message


class Unauthorized(CustodyError):
    """The caller's role does not permit the operation."""

    code = "Unauthorized"
    field = "role"


class NotOwner(CustodyError):
    """The caller is not the current holder of the asset."""

    code = "NotOwner"
    field = "owner"


class NotFound(CustodyError):
    """No asset or shipment exists under the given identifier."""

    code = "NotFound"
    field = "asset_id"


class InvalidTarget(CustodyError):
    """The recipient's role is not the next custodian in the chain."""

    code = "InvalidTarget"
    field = "new_owner"


class InvalidState(CustodyError):
    """The shipment is not in the lifecycle state the transfer requires."""

    code = "InvalidState"
    field = "state"


class InvariantViolation(CustodyError):
    """Internal consistency failure. The operation is aborted as a whole."""

    code = "InvariantViolation"
    field = "invariant"
