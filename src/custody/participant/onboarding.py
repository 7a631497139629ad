"""Role registry mutations: admin seeding and user onboarding."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import String
from protean.utils.globals import current_domain

from custody.domain import custody
from custody.errors import Unauthorized
from custody.participant.participant import Participant, Role
from custody.participant.registry import admins, require_role, role_of

logger = structlog.get_logger(__name__)


@custody.command(part_of="Participant")
class BootstrapAdmin:
    """Seed the registry's first administrator."""

    actor = String(required=True, max_length=128)


@custody.command(part_of="Participant")
class OnboardUser:
    """Assign a role to an actor. Only administrators may do this."""

    admin = String(required=True, max_length=128)
    actor = String(required=True, max_length=128)
    role = String(required=True, choices=Role)


@custody.command_handler(part_of=Participant)
class OnboardingHandler:
    @handle(BootstrapAdmin)
    def bootstrap_admin(self, command):
        existing = admins()
        if command.actor in existing:
            return command.actor
        if existing:
            raise Unauthorized("Registry already has an administrator")

        current = role_of(command.actor)
        if current is not None:
            raise Unauthorized(f"{command.actor} already holds the {current.value} role")

        repo = current_domain.repository_for(Participant)
        repo.add(Participant.onboard(command.actor, Role.ADMIN.value, onboarded_by=command.actor))
        logger.info("Administrator seeded", actor=command.actor)
        return command.actor

    @handle(OnboardUser)
    def onboard_user(self, command):
        try:
            require_role(command.admin, Role.ADMIN, action="onboard users")
        except Unauthorized:
            logger.warning("Onboarding rejected", admin=command.admin, actor=command.actor)
            raise

        if command.role != Role.ADMIN.value and admins() == [command.actor]:
            raise Unauthorized("Cannot remove the last administrator")

        repo = current_domain.repository_for(Participant)
        try:
            participant = repo.get(command.actor)
            participant.assign(command.role, assigned_by=command.admin)
        except ObjectNotFoundError:
            participant = Participant.onboard(command.actor, command.role, onboarded_by=command.admin)
        repo.add(participant)

        logger.info("Role assigned", actor=command.actor, role=command.role, admin=command.admin)
        return command.role
