"""Asset aggregate: a uniquely identified, singly-owned shipment token.

Asset ids are derived from the number of assets minted so far and the batch
number supplied at creation. The derivation is deterministic; collisions are
still checked on mint and rejected.
"""

import hashlib
from datetime import UTC, datetime

from protean.fields import DateTime, Integer, String

from custody.domain import custody
from custody.errors import NotOwner

# Width of the derived id in bytes. 48 bits keeps ids exact in JSON clients.
_ID_BYTES = 6


def asset_id_for(total_supply: int, batch_no: int) -> int:
    """Derive the id of the next asset from the current supply and its batch number."""
    digest = hashlib.sha256(f"{total_supply}:{batch_no}".encode()).digest()
    return int.from_bytes(digest[:_ID_BYTES], "big")


@custody.aggregate
class Asset:
    asset_id = Integer(identifier=True, required=True)
    batch_no = Integer(required=True, min_value=0)
    owner = String(required=True, max_length=128)
    minted_at = DateTime()

    @classmethod
    def mint(cls, asset_id: int, owner: str, batch_no: int):
        return cls(
            asset_id=asset_id,
            batch_no=batch_no,
            owner=owner,
            minted_at=datetime.now(UTC),
        )

    def transfer_to(self, sender: str, recipient: str) -> None:
        """Move the asset from ``sender``'s holdings to ``recipient``'s."""
        if self.owner != sender:
            raise NotOwner(f"{sender} does not hold asset {self.asset_id}")
        self.owner = recipient
