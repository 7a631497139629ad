"""Asset registry operations: minting, ownership transfer and reads.

Minting and transfer return staged aggregates; the calling handler persists
them together with the matching shipment change, so the registry never holds
a half-applied update.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from custody.asset.asset import Asset, asset_id_for
from custody.errors import InvariantViolation, NotFound


def _load(asset_id: int) -> Asset:
    try:
        return current_domain.repository_for(Asset).get(asset_id)
    except ObjectNotFoundError:
        raise NotFound(f"Asset {asset_id} does not exist") from None


def mint(owner: str, batch_no: int) -> Asset:
    """Stage a fresh asset for ``owner``. Raises ``InvariantViolation`` on id collision."""
    repo = current_domain.repository_for(Asset)
    asset_id = asset_id_for(repo.total_supply(), batch_no)
    try:
        repo.get(asset_id)
    except ObjectNotFoundError:
        return Asset.mint(asset_id=asset_id, owner=owner, batch_no=batch_no)
    raise InvariantViolation(f"Asset id {asset_id} is already taken", field="asset_id")


def transfer_ownership(asset_id: int, sender: str, recipient: str) -> Asset:
    """Stage the ownership change of an existing asset."""
    asset = _load(asset_id)
    asset.transfer_to(sender, recipient)
    return asset


def owner_of(asset_id: int) -> str:
    return _load(asset_id).owner


def total_supply() -> int:
    return current_domain.repository_for(Asset).total_supply()


def holdings_of(owner: str, offset: int = 0, limit: int = 100) -> list[int]:
    assets = current_domain.repository_for(Asset).held_by(owner, offset=offset, limit=limit)
    return [asset.asset_id for asset in assets]
