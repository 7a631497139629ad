"""Role lookups shared by every gated operation."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from custody.errors import Unauthorized
from custody.participant.participant import UNASSIGNED, Participant, Role


def role_of(actor: str) -> Role | None:
    """Return the actor's role, or ``None`` when the actor was never onboarded."""
    if not actor:
        return None
    try:
        participant = current_domain.repository_for(Participant).get(actor)
    except ObjectNotFoundError:
        return None
    return Role(participant.role)


def role_name(actor: str) -> str:
    role = role_of(actor)
    return role.value if role is not None else UNASSIGNED


def require_role(actor: str, *allowed: Role, action: str) -> Role:
    """Return the caller's role if it is one of ``allowed``, else raise ``Unauthorized``."""
    role = role_of(actor)
    if role not in allowed:
        names = " or ".join(r.value for r in allowed)
        held = role.value if role is not None else UNASSIGNED
        raise Unauthorized(f"Only {names} may {action} (caller role: {held})")
    return role


def admins() -> list[str]:
    repo = current_domain.repository_for(Participant)
    return [p.actor for p in repo._dao.query.filter(role=Role.ADMIN.value).all().items]
