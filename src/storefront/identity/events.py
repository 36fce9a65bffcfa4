"""Domain events for the User and Address aggregates."""

from protean.fields import Boolean, DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new user account was created."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    first_name: String(required=True)
    last_name: String(required=True)
    registered_at: DateTime(required=True)


@storefront.event(part_of="Address")
class AddressAdded:
    """An address was added to a user's address book."""

    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    city: String(required=True)
    country: String(required=True)
    is_default: Boolean(default=False)


@storefront.event(part_of="Address")
class DefaultAddressChanged:
    """A user picked a different address as their default."""

    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
