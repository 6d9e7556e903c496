"""
FastAPI Dependencies
"""
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Any, Dict, Optional
import jwt
import logging

from config.settings import settings
from config.constants import ERROR_MESSAGES, UserRole
from core.exceptions import AuthenticationError, AuthorizationError
from core.models import CurrentUser
from services.domain_service import DomainService, build_domain_service
from utils.validators import validate_email_address

logger = logging.getLogger(__name__)

# Security
security = HTTPBearer(auto_error=False)


def resolve_role(payload: Dict[str, Any]) -> UserRole:
    """Admin when the token says so or the email is on the admin list"""
    if str(payload.get("role", "")).lower() == UserRole.ADMIN.value:
        return UserRole.ADMIN

    email = payload.get("email")
    if email and validate_email_address(email):
        admin_emails = {e.lower() for e in settings.admin_emails}
        if email.lower() in admin_emails:
            return UserRole.ADMIN

    return UserRole.USER


def decode_token(token: str) -> CurrentUser:
    """
    Decode a bearer JWT into the current user

    Raises:
        AuthenticationError: expired, invalid or subject-less token
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_aud": False}
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token payload")

    return CurrentUser(
        user_id=str(user_id),
        role=resolve_role(payload),
        email=payload.get("email")
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentUser:
    """
    Get current user from JWT token

    Returns:
        CurrentUser with role resolved from the token alone
    """
    if credentials is None:
        raise AuthenticationError(ERROR_MESSAGES["auth_required"])

    return decode_token(credentials.credentials)


async def require_admin(
    user: CurrentUser = Depends(get_current_user)
) -> CurrentUser:
    """
    Require admin user

    Returns:
        CurrentUser if admin
    """
    if not user.is_admin:
        logger.warning(f"⚠️ Non-admin {user.user_id} attempted an admin action")
        raise AuthorizationError("Admin access required")
    return user


def get_domain_service(request: Request) -> DomainService:
    """Service built at startup; built lazily when the lifespan did not run"""
    service = getattr(request.app.state, "domain_service", None)
    if service is None:
        service = build_domain_service()
        request.app.state.domain_service = service
    return service
