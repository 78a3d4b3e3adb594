"""UserProfile aggregate — the role attached to an authenticated user."""

from enum import Enum

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from raffle.domain import raffle


class UserRole(Enum):
    ADMIN = "admin"
    USER = "user"


@raffle.aggregate
class UserProfile:
    user_id = Identifier(required=True)
    email = String(max_length=255)
    role = String(choices=UserRole, default=UserRole.USER.value)


@raffle.repository(part_of=UserProfile)
class UserProfileRepository:
    def find_by_user_id(self, user_id) -> UserProfile | None:
        results = self._dao.query.filter(user_id=str(user_id)).all().items
        return results[0] if results else None


@raffle.command(part_of="UserProfile")
class RegisterUserProfile:
    """Create a profile, or change the email and role of an existing one."""

    user_id = Identifier(required=True)
    email = String(max_length=255)
    role = String(choices=UserRole, default=UserRole.USER.value)


@raffle.command_handler(part_of=UserProfile)
class UserProfileHandler:
    @handle(RegisterUserProfile)
    def register(self, command):
        repo = current_domain.repository_for(UserProfile)
        profile = repo.find_by_user_id(command.user_id)
        if profile is None:
            profile = UserProfile(user_id=command.user_id, email=command.email, role=command.role)
        else:
            profile.email = command.email or profile.email
            profile.role = command.role
        repo.add(profile)
        return str(profile.id)
