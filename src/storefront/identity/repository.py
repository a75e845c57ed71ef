"""Repository for the User aggregate."""

from storefront.domain import storefront
from storefront.identity.user import Role, User, normalize_email


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        """Find a user by (case-insensitive) email."""
        return self.query.filter(email=normalize_email(email)).all().first

    def find_all(self) -> list[User]:
        return self.query.order_by("created_at").limit(None).all().items

    def find_non_admins(self) -> list[User]:
        return self.query.filter(role=Role.USER.value).limit(None).all().items
