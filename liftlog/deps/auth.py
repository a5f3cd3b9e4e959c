# liftlog/deps/auth.py
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from jose.exceptions import ExpiredSignatureError, JWTError

from liftlog.actions.base import LoggingRevalidator, RequestContext, Revalidator
from liftlog.db import get_db
from liftlog.security import decode_token

log = logging.getLogger(__name__)

# Exposes Bearer auth in Swagger. auto_error is off: a missing identity is reported
# by the action layer as an Unauthorized result, not by FastAPI.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token", auto_error=False)

def get_current_user_id(token: Optional[str] = Depends(oauth2_scheme)) -> Optional[str]:
    """Identity-provider subject for the bearer token, or None when unauthenticated."""
    if not token:
        return None
    try:
        payload = decode_token(token)
    except ExpiredSignatureError:
        log.info("rejected expired token")
        return None
    except JWTError:
        log.info("rejected invalid token")
        return None
    sub = payload.get("sub")
    if not sub or not isinstance(sub, str):
        return None
    return sub

def get_revalidator() -> Revalidator:
    return LoggingRevalidator()

def get_context(
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_current_user_id),
    revalidator: Revalidator = Depends(get_revalidator),
) -> RequestContext:
    return RequestContext(db=db, user_id=user_id, revalidator=revalidator)
