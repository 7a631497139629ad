"""PurchaseOrder aggregate: a single-slot request mailbox per manufacturer.

Each new request addressed to a manufacturer replaces the previous one.
There is no queue and no history.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, String, Text

from custody.domain import custody


@custody.aggregate
class PurchaseOrder:
    manufacturer = String(identifier=True, required=True, max_length=128)
    item_name = String(required=True, max_length=200)
    description = Text()
    requested_by = String(required=True, max_length=128)
    requested_at = DateTime()

    @classmethod
    def place(cls, manufacturer: str, item_name: str, description: str | None, requested_by: str):
        return cls(
            manufacturer=manufacturer,
            item_name=item_name,
            description=description or "",
            requested_by=requested_by,
            requested_at=datetime.now(UTC),
        )

    def replace(self, item_name: str, description: str | None, requested_by: str) -> None:
        self.item_name = item_name
        self.description = description or ""
        self.requested_by = requested_by
        self.requested_at = datetime.now(UTC)
