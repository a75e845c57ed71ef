"""User registration: command and handler.

Registration creates the account and its shopping cart in one unit of work.
Commands are kept in the event store, so callers hash the password before
building RegisterUser.
The cart is stored through its own repository; the user keeps no reference
to it.
"""

from protean import handle
from protean.exceptions import InvalidStateError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.domain import logger, storefront
from storefront.identity.user import Role, User


@storefront.command(part_of="User")
class RegisterUser:
    name: String(required=True, max_length=200)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255, sanitize=False)
    role: String(choices=Role, default=Role.USER.value)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        user_repo = current_domain.repository_for(User)
        if user_repo.find_by_email(command.email) is not None:
            raise InvalidStateError(f"Email already registered: {command.email}")

        user = User.register(
            name=command.name,
            email=command.email,
            password_hash=command.password_hash,
            role=Role(command.role),
        )
        user_repo.add(user)
        current_domain.repository_for(ShoppingCart).add(ShoppingCart.create(user_id=user.id))

        logger.info("user_registered", user_id=str(user.id), role=user.role)
        return str(user.id)
