"""Account administration: admin-only user removal."""

from protean import handle
from protean.exceptions import InvalidOperationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.domain import logger, storefront
from storefront.identity.user import User


@storefront.command(part_of="User")
class DeleteUser:
    user_id = Identifier(required=True)
    requested_by = Identifier(required=True)


@storefront.command(part_of="User")
class DeleteNonAdminUsers:
    requested_by = Identifier(required=True)


def _delete_user(user):
    current_domain.repository_for(ShoppingCart).delete_by_user(user.id)
    current_domain.repository_for(User)._dao.delete(user)


@storefront.command_handler(part_of=User)
class AdministerUsersHandler:
    @handle(DeleteUser)
    def delete_user(self, command):
        if str(command.user_id) == str(command.requested_by):
            raise InvalidOperationError("Administrators cannot delete their own account")

        user = current_domain.repository_for(User).get(command.user_id)
        if user.is_admin:
            raise InvalidOperationError("Administrator accounts cannot be deleted")

        _delete_user(user)
        logger.info("user_deleted", user_id=str(command.user_id), requested_by=str(command.requested_by))

    @handle(DeleteNonAdminUsers)
    def delete_non_admin_users(self, command):
        users = current_domain.repository_for(User).find_non_admins()
        for user in users:
            _delete_user(user)

        logger.info("non_admin_users_deleted", count=len(users), requested_by=str(command.requested_by))
        return len(users)
