"""Address book management: commands and handler."""

import structlog
from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.address import Address

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Address")
class AddAddress:
    user_id: Identifier(required=True)
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    zip_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)
    is_default: Boolean(default=False)


@storefront.command(part_of="Address")
class RemoveAddress:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


@storefront.command(part_of="Address")
class SetDefaultAddress:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


@storefront.command_handler(part_of=Address)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(Address)

        # A user's first address is always the default
        make_default = bool(command.is_default) or repo.count_for_user(command.user_id) == 0
        if make_default:
            repo.reset_defaults(command.user_id)

        address = Address.create(
            user_id=command.user_id,
            street=command.street,
            city=command.city,
            state=command.state,
            zip_code=command.zip_code,
            country=command.country,
            is_default=make_default,
        )
        repo.add(address)
        logger.info(
            "Address added",
            user_id=command.user_id,
            address_id=str(address.id),
            is_default=make_default,
        )
        return str(address.id)

    @handle(RemoveAddress)
    def remove_address(self, command):
        repo = current_domain.repository_for(Address)
        address = repo.get_owned(command.user_id, command.address_id)
        repo._dao.delete(address)
        logger.info("Address removed", user_id=command.user_id, address_id=command.address_id)

    @handle(SetDefaultAddress)
    def set_default_address(self, command):
        repo = current_domain.repository_for(Address)
        address = repo.get_owned(command.user_id, command.address_id)
        repo.reset_defaults(command.user_id, keep=str(address.id))
        address.mark_default()
        repo.add(address)
