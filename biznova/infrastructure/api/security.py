"""Bearer-token verification — resolves the calling retailer or customer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, Header, HTTPException, status

from biznova.application.ports.entity_repo import EntityRepository
from biznova.config import settings
from biznova.domain.entities.registered_entity import RegisteredEntity
from biznova.domain.value_objects.enums import EntityRole
from biznova.infrastructure.api.dependencies import get_entity_repo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Caller:
    entity: RegisteredEntity

    @property
    def role(self) -> EntityRole:
        return self.entity.role


def create_access_token(
    entity_id: int,
    role: EntityRole,
    expires_in: timedelta | None = None,
) -> str:
    """Sign a token in the format the login service issues: {userId, userType, exp}."""
    expires_in = expires_in or timedelta(days=settings.access_token_expire_days)
    payload = {
        "userId": str(entity_id),
        "userType": role.value,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _decode(token: str) -> dict:
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token expired") from None
    except jwt.InvalidTokenError:
        raise _unauthorized("Invalid token") from None


async def get_current_caller(
    authorization: str | None = Header(default=None),
    entity_repo: EntityRepository = Depends(get_entity_repo),
) -> Caller:
    """FastAPI dependency: verify the bearer token and load the caller."""
    if not authorization:
        raise _unauthorized("Access token required")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise _unauthorized("Access token required")

    payload = _decode(token.strip())
    try:
        entity_id = int(payload["userId"])
    except (KeyError, TypeError, ValueError):
        raise _unauthorized("Invalid token") from None

    entity = await entity_repo.get_by_id(entity_id)
    if entity is None:
        raise _unauthorized("Invalid token - user not found")

    claimed = payload.get("userType")
    if claimed and claimed != entity.role.value:
        logger.debug("Token for %s claims userType=%s, stored role is %s", entity_id, claimed, entity.role.value)
    return Caller(entity=entity)


def require_retailer(caller: Caller) -> None:
    if caller.role is not EntityRole.RETAILER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied - retailer account required",
        )
