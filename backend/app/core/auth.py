import hashlib
import logging
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.dependencies import get_db
from app.models.post import ApiKey

logger = logging.getLogger(__name__)

PERMISSION_ALL = "ALL"
ALLOWED_PERMISSIONS = {"CREATE_POST", "UPDATE_POST", "DELETE_POST", "ANALYZE_POST", PERMISSION_ALL}
API_KEY_PREFIX = "pk_"


@dataclass
class CurrentApiKey:
    id: int
    name: str
    permissions: list[str] = field(default_factory=list)

    def allows(self, permission: str) -> bool:
        return PERMISSION_ALL in self.permissions or permission in self.permissions


def hash_api_key(raw_key: str) -> str:
    return hashlib.sha256(raw_key.encode("utf-8")).hexdigest()


def generate_api_key() -> str:
    return API_KEY_PREFIX + secrets.token_urlsafe(24)


def create_api_key(db: Session, *, name: str, permissions: list[str]) -> tuple[ApiKey, str]:
    """Persist a new key; the raw value is returned once and never stored."""
    unknown = set(permissions) - ALLOWED_PERMISSIONS
    if unknown:
        raise ValueError(f"Unknown permissions: {sorted(unknown)}")
    raw_key = generate_api_key()
    row = ApiKey(
        name=name,
        key_hash=hash_api_key(raw_key),
        key_prefix=raw_key[:8],
        permissions=list(permissions),
        is_active=True,
    )
    db.add(row)
    db.flush()
    return row, raw_key


def _extract_key(x_api_key: Optional[str], authorization: Optional[str]) -> Optional[str]:
    if x_api_key and x_api_key.strip():
        return x_api_key.strip()
    if authorization and authorization.startswith("Bearer "):
        token = authorization.split(" ", 1)[1].strip()
        return token or None
    return None


def get_current_api_key(
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    authorization: Optional[str] = Header(None, alias="Authorization"),
    db: Session = Depends(get_db),
) -> CurrentApiKey:
    raw_key = _extract_key(x_api_key, authorization)
    if not raw_key:
        raise HTTPException(401, "API key is required")

    row = db.scalar(select(ApiKey).where(ApiKey.key_hash == hash_api_key(raw_key)))
    if row is None or not row.is_active:
        logger.info("Rejected API key prefix=%s", raw_key[:8])
        raise HTTPException(401, "Invalid or inactive API key")

    row.last_used_at = datetime.now(timezone.utc)
    db.add(row)
    db.commit()

    return CurrentApiKey(id=row.id, name=row.name, permissions=list(row.permissions or []))


def require_permission(permission: str):
    def _dependency(api_key: CurrentApiKey = Depends(get_current_api_key)) -> CurrentApiKey:
        if not api_key.allows(permission):
            raise HTTPException(403, f"Insufficient permissions. Required: {permission}")
        return api_key

    return _dependency
