"""User aggregate: account, credentials and role."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from storefront.domain import storefront
from storefront.identity.events import UserRegistered
from storefront.identity.passwords import verify_password


class Role(Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@storefront.aggregate
class User:
    name: String(required=True, max_length=200)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255, sanitize=False)
    role: String(choices=Role, default=Role.USER.value)
    created_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        email = self.email or ""
        local_part, _, domain_part = email.partition("@")
        if not local_part or "." not in domain_part or " " in email or domain_part.startswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Name should not be empty"]})

    @classmethod
    def register(cls, name, email, password_hash, role=Role.USER):
        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=normalize_email(email),
            password_hash=password_hash,
            role=role.value,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                name=user.name,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self):
        return self.role == Role.ADMIN.value

    def check_password(self, password):
        return verify_password(self.password_hash, password)


def normalize_email(email):
    return email.strip().lower() if email else email
