"""Custody bounded context: Pharmaceutical Shipment Custody Chain.

Tracks shipments as uniquely-owned assets moving Manufacturer → Pharmacist →
Buyer. Roles are assigned by an administrator; every custody transfer couples
an ownership change to one forward step of the shipment lifecycle.
"""

from protean.domain import Domain

custody = Domain(name="custody")
