"""Address aggregate root and its repository.

Addresses are stored one document per address rather than nested in the
user, so the "one default per user" rule cannot be an aggregate invariant.
It is kept by resetting every other default of the user with a single bulk
update before a new default is flagged.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Identifier, String

from storefront.domain import storefront


@storefront.aggregate
class Address:
    """A shipping address in a user's address book."""

    user_id: Identifier(required=True)
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    zip_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)
    is_default: Boolean(default=False)
    created_at: DateTime()

    @classmethod
    def create(cls, user_id, street, city, zip_code, country, state=None, is_default=False):
        from storefront.identity.events import AddressAdded

        address = cls(
            user_id=user_id,
            street=street,
            city=city,
            state=state,
            zip_code=zip_code,
            country=country,
            is_default=is_default,
            created_at=datetime.now(UTC),
        )
        address.raise_(
            AddressAdded(
                user_id=str(user_id),
                address_id=str(address.id),
                city=city,
                country=country,
                is_default=is_default,
            )
        )
        return address

    def mark_default(self):
        from storefront.identity.events import DefaultAddressChanged

        self.is_default = True
        self.raise_(
            DefaultAddressChanged(
                user_id=str(self.user_id),
                address_id=str(self.id),
            )
        )


@storefront.repository(part_of=Address)
class AddressRepository:
    def find_for_user(self, user_id: str) -> list[Address]:
        return self._dao.query.filter(user_id=user_id).order_by("created_at").all().items

    def count_for_user(self, user_id: str) -> int:
        return self._dao.query.filter(user_id=user_id).all().total

    def find_default(self, user_id: str) -> Address | None:
        return self._dao.query.filter(user_id=user_id, is_default=True).all().first

    def get_owned(self, user_id: str, address_id: str) -> Address:
        """Fetch an address only if it belongs to ``user_id``.

        Someone else's address is reported exactly like a missing one.
        """
        address = self._dao.query.filter(id=address_id, user_id=user_id).all().first
        if address is None:
            raise ObjectNotFoundError({"address": [f"Address `{address_id}` not found"]})
        return address

    def reset_defaults(self, user_id: str, keep: str | None = None) -> int:
        """Clear the default flag on every address of the user in one update.

        ``keep`` leaves that address untouched, so a caller already holding it
        can save it afterwards without a version conflict.
        """
        query = self._dao.query.filter(user_id=user_id, is_default=True)
        if keep is not None:
            query = query.exclude(id=keep)
        return query.update(is_default=False)