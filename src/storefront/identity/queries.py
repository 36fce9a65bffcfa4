"""Read side of identity: profiles and address books."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.address import Address
from storefront.identity.user import User


def get_user(user_id: str) -> User:
    return current_domain.repository_for(User).get(user_id)


def list_addresses(user_id: str) -> list[Address]:
    return current_domain.repository_for(Address).find_for_user(user_id)


def get_address(user_id: str, address_id: str) -> Address:
    return current_domain.repository_for(Address).get_owned(user_id, address_id)


def get_default_address(user_id: str) -> Address:
    """The user's default address; ``ObjectNotFoundError`` when there is none."""
    address = current_domain.repository_for(Address).find_default(user_id)
    if address is None:
        raise ObjectNotFoundError({"address": ["No default address found"]})
    return address
