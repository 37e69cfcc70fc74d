# task_portal/utils/auth.py
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from task_portal.config.settings import settings
from task_portal.database import get_db
from task_portal.models.user import User, UserRole
from task_portal.services.exceptions import AuthorizationError
from task_portal.utils.security import verify_token


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, resolved once per request"""
    user_id: int
    username: str
    role: str
    employee_id: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(
            user_id=user.id,
            username=user.username,
            role=user.role,
            employee_id=user.employee_id,
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def get_current_identity(request: Request, db: Session = Depends(get_db)) -> Identity:
    """Resolve the session cookie to an Identity, or refuse with 403"""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        raise AuthorizationError("Not logged in")

    payload = verify_token(token)
    if not payload or "sub" not in payload:
        raise AuthorizationError("Session expired or invalid")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthorizationError("Session expired or invalid")

    # Reload so a promotion applies from the next request on
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise AuthorizationError("Session expired or invalid")

    return Identity.from_user(user)


def require_role(role: UserRole):
    """Dependency factory gating a route on a single role"""
    def checker(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role != role.value:
            raise AuthorizationError("Access denied")
        return identity

    return checker


require_admin = require_role(UserRole.ADMIN)
require_employee = require_role(UserRole.EMPLOYEE)
