"""Repository for the Asset aggregate."""

from custody.asset.asset import Asset
from custody.domain import custody


@custody.repository(part_of=Asset)
class AssetRepository:
    """Asset lookups beyond plain CRUD: supply and per-owner enumeration."""

    def total_supply(self) -> int:
        """Number of assets ever minted. Assets are never deleted."""
        return self._dao.query.all().total

    def held_by(self, owner: str, offset: int = 0, limit: int = 100) -> list[Asset]:
        """Assets currently held by ``owner``, ordered by asset id."""
        return self._dao.query.filter(owner=owner).order_by("asset_id").offset(offset).limit(limit).all().items
