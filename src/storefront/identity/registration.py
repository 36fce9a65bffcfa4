"""User registration and profile: commands and handler."""

import json

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.exceptions import ConflictError
from storefront.identity.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    """Create a new user account."""

    email: String(required=True, max_length=254)
    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    roles: Text()  # JSON list of role names


@storefront.command(part_of="User")
class UpdateProfile:
    user_id: Identifier(required=True)
    first_name: String(max_length=100)
    last_name: String(max_length=100)


@storefront.command_handler(part_of=User)
class UserAccountHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ConflictError({"email": ["Email is already registered"]})

        roles = command.roles
        if isinstance(roles, str):
            roles = json.loads(roles)

        user = User.register(
            email=command.email,
            first_name=command.first_name,
            last_name=command.last_name,
            roles=roles,
        )
        repo.add(user)
        logger.info("User registered", user_id=str(user.id))
        return str(user.id)

    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_profile(first_name=command.first_name, last_name=command.last_name)
        repo.add(user)
