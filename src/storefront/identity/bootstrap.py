"""Startup bootstrap for accounts.

Roles are a closed enum, so the only thing to seed is the administrator
account named in the domain's ``[custom]`` settings. Safe to run on every
process start.
"""

from protean.domain import Domain
from protean.utils.globals import current_domain

from storefront.domain import logger
from storefront.identity.passwords import hash_password
from storefront.identity.registration import RegisterUser
from storefront.identity.user import Role, User


def ensure_default_admin(domain: Domain) -> str | None:
    """Create the configured administrator if missing.

    Returns the new user's id, or None when an account with the admin email
    already exists.
    """
    with domain.domain_context():
        email = domain.ADMIN_EMAIL
        existing = current_domain.repository_for(User).find_by_email(email)
        if existing is not None:
            logger.debug("admin_already_present", email=existing.email)
            return None

        name = f"{domain.ADMIN_FIRST_NAME} {domain.ADMIN_LAST_NAME}".strip()
        user_id = current_domain.process(
            RegisterUser(
                name=name,
                email=email,
                password_hash=hash_password(domain.ADMIN_PASSWORD, domain.PASSWORD_HASH_ITERATIONS),
                role=Role.ADMIN.value,
            ),
            asynchronous=False,
        )
        logger.info("admin_bootstrapped", user_id=user_id, email=email)
        return user_id
