"""HTTP Basic authentication and role checks for the Storefront API."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from protean.utils.globals import current_domain

from storefront.domain import logger
from storefront.identity.user import User

basic_auth = HTTPBasic()


async def current_user(credentials: HTTPBasicCredentials = Depends(basic_auth)) -> User:
    """Resolve the caller from Basic credentials (email + password)."""
    user = current_domain.repository_for(User).find_by_email(credentials.username)
    if user is None or not user.check_password(credentials.password):
        logger.info("authentication_failed", username=credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return user


async def require_admin(user: User = Depends(current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Administrator role required")
    return user
