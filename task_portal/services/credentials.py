# task_portal/services/credentials.py
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from task_portal.config.settings import settings
from task_portal.models.user import User, UserRole
from task_portal.services.employee_ids import EmployeeIdIssuer
from task_portal.services.exceptions import (
    AuthenticationError,
    UserNotFound,
    UsernameTaken,
    ValidationError,
)
from task_portal.utils.security import MAX_PASSWORD_BYTES, get_password_hash, verify_password

logger = logging.getLogger(__name__)


class CredentialStore:
    """User accounts: creation, password checks, promotion and listing"""

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.employee_id == employee_id).first()

    def create_user(self, username: str, password: str, role: UserRole = UserRole.EMPLOYEE) -> User:
        """
        Create a user with a hashed password.

        Employees get an employee ID issued as part of the same insert.
        Raises UsernameTaken if the username is already registered.
        """
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Username and password are required")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")

        if self.get_by_username(username):
            raise UsernameTaken()

        role = UserRole(role)
        new_user = User(
            username=username,
            hashed_password=get_password_hash(password),
            role=role.value,
        )

        if role == UserRole.EMPLOYEE:
            new_user = EmployeeIdIssuer(self.db).insert_with_id(new_user)
        else:
            self.db.add(new_user)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                raise UsernameTaken()
            self.db.refresh(new_user)

        logger.info(f"Created {new_user.role} '{new_user.username}' (employee ID: {new_user.employee_id})")
        return new_user

    def verify(self, username: str, password: str) -> User:
        """Return the user for valid credentials; one uniform error otherwise"""
        user = self.get_by_username((username or "").strip())
        if not user or not verify_password(password or "", user.hashed_password):
            logger.warning(f"Failed login attempt for '{username}'")
            raise AuthenticationError()
        return user

    def promote(self, employee_id: str) -> User:
        """Make the user an admin. Promoting an admin again is a no-op."""
        user = self.get_by_employee_id(employee_id)
        if not user:
            raise UserNotFound()

        if user.is_admin:
            logger.info(f"User '{user.username}' is already an admin")
            return user

        user.role = UserRole.ADMIN.value
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Promoted '{user.username}' ({user.employee_id}) to admin")
        return user

    def list_employees(self) -> List[User]:
        return self.db.query(User).filter(
            User.role == UserRole.EMPLOYEE.value
        ).order_by(User.id).all()

    def ensure_default_admin(self) -> Optional[User]:
        """Create the bootstrap admin if no admin exists yet"""
        existing_admin = self.db.query(User).filter(User.role == UserRole.ADMIN.value).first()
        if existing_admin:
            return None

        admin = self.create_user(
            settings.DEFAULT_ADMIN_USERNAME,
            settings.DEFAULT_ADMIN_PASSWORD,
            role=UserRole.ADMIN,
        )
        logger.info(f"Default admin created: username={admin.username}")
        return admin
