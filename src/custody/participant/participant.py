"""Participant aggregate: one row of the role registry.

Each actor holds at most one role. Actors without a row have no role at all;
they are never treated as holding a default role.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, String

from custody.domain import custody


class Role(Enum):
    MANUFACTURER = "Manufacturer"
    PHARMACIST = "Pharmacist"
    BUYER = "Buyer"
    ADMIN = "Admin"


# Label rendered for actors that were never onboarded
UNASSIGNED = "Unassigned"


@custody.aggregate
class Participant:
    """An actor known to the registry together with its current role."""

    actor = String(identifier=True, required=True, max_length=128)
    role = String(required=True, choices=Role)
    onboarded_by = String(max_length=128)
    onboarded_at = DateTime()

    @classmethod
    def onboard(cls, actor: str, role: str, onboarded_by: str):
        return cls(
            actor=actor,
            role=role,
            onboarded_by=onboarded_by,
            onboarded_at=datetime.now(UTC),
        )

    def assign(self, role: str, assigned_by: str) -> None:
        """Overwrite the current role. Re-assigning the same role is allowed."""
        self.role = role
        self.onboarded_by = assigned_by
        self.onboarded_at = datetime.now(UTC)
