"""User aggregate root and its repository."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, List, String

from storefront.domain import storefront
from storefront.identity.tokens import USER_ROLE, Principal

_FORBIDDEN_EMAIL_CHARS = (" ", ";", ",", "(", ")", '"', ":", "<", ">", "\\")

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


@storefront.aggregate
class User:
    """A registered shopper or administrator.

    Credentials live with the identity provider behind the token verifier;
    the storefront only keeps the profile and the roles that drive access
    checks.
    """

    email: String(required=True, max_length=254, unique=True)
    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    roles: List(content_type=String)
    enabled: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        email = self.email or ""
        if email.count("@") != 1 or any(c in email for c in _FORBIDDEN_EMAIL_CHARS):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        local_part, domain_part = email.split("@", 1)
        if not local_part or "." not in domain_part or ".." in email:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

    @classmethod
    def register(cls, email, first_name, last_name, roles=None):
        from storefront.identity.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            email=email.strip().lower(),
            first_name=first_name,
            last_name=last_name,
            roles=list(roles) if roles else [USER_ROLE],
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                first_name=first_name,
                last_name=last_name,
                registered_at=now,
            )
        )
        return user

    def update_profile(self, first_name=_UNSET, last_name=_UNSET):
        if first_name is not _UNSET and first_name is not None:
            self.first_name = first_name
        if last_name is not _UNSET and last_name is not None:
            self.last_name = last_name
        self.updated_at = datetime.now(UTC)

    def as_principal(self) -> Principal:
        return Principal(user_id=str(self.id), roles=frozenset(self.roles or [USER_ROLE]))


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=email.strip().lower()).all().first
