"""
Per-request GraphQL context: database storage and the authenticated user.
"""
import asyncio
import logging
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from nuber_api.core.security import decode_token
from nuber_api.db.session import get_db
from nuber_api.db.storage import Storage
from nuber_api.models.user import User

logger = logging.getLogger(__name__)


class GraphQLContext(BaseContext):
    def __init__(self, db: Session, user: Optional[User] = None):
        super().__init__()
        self.db = db
        self.storage = Storage(db)
        self.user = user
        # Serializes resolver work on the request's session
        self.lock = asyncio.Lock()


def get_token(request: Request) -> Optional[str]:
    """Read the access token from ``Authorization: Bearer`` or ``x-jwt``."""
    authorization = request.headers.get("Authorization")
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip()
    return request.headers.get("x-jwt")


def resolve_user(token: Optional[str], storage: Storage) -> Optional[User]:
    """Look up the user a token belongs to; anything invalid yields None."""
    if not token:
        return None

    payload = decode_token(token)
    if payload is None or payload.get("type") != "access":
        logger.warning("Ignoring invalid access token")
        return None

    subject = str(payload.get("sub", ""))
    if not subject.isdigit():
        logger.warning("Ignoring access token with malformed subject")
        return None

    return storage.users.find_by_id(int(subject))


def get_context(request: Request, db: Session = Depends(get_db)) -> GraphQLContext:
    context = GraphQLContext(db=db)
    context.user = resolve_user(get_token(request), context.storage)
    return context
