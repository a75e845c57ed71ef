"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new account was created together with its shopping cart."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True, max_length=254)
    name: String(required=True, max_length=200)
    role: String(required=True, max_length=20)
    registered_at: DateTime(required=True)
