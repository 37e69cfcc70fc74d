# task_portal/services/employee_ids.py
"""
Employee identifier issuance.

Identifiers look like EMP001, EMP002, ... and are derived from the highest
identifier already stored. Reading the maximum is only a hint: two concurrent
signups can compute the same candidate. Uniqueness is therefore enforced by
the unique constraint on users.employee_id, and a losing insert is rolled
back and retried with a fresh candidate.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from task_portal.config.settings import settings
from task_portal.models.user import User
from task_portal.services.exceptions import DuplicateIdentifier, UsernameTaken

logger = logging.getLogger(__name__)


def format_employee_id(sequence: int, prefix: str = None, width: int = None) -> str:
    prefix = settings.EMPLOYEE_ID_PREFIX if prefix is None else prefix
    width = settings.EMPLOYEE_ID_WIDTH if width is None else width
    return f"{prefix}{sequence:0{width}d}"


class EmployeeIdIssuer:
    """Issues employee identifiers and inserts users under them"""

    def __init__(self, db: Session, prefix: str = None, max_attempts: int = None):
        self.db = db
        self.prefix = settings.EMPLOYEE_ID_PREFIX if prefix is None else prefix
        self.max_attempts = max_attempts or settings.EMPLOYEE_ID_MAX_ATTEMPTS

    def next_candidate(self) -> str:
        """Next identifier after the highest one currently stored"""
        rows = self.db.query(User.employee_id).filter(
            User.employee_id.like(f"{self.prefix}%")
        ).all()

        highest = 0
        for (employee_id,) in rows:
            suffix = employee_id[len(self.prefix):]
            if suffix.isdigit():
                highest = max(highest, int(suffix))

        return format_employee_id(highest + 1, prefix=self.prefix)

    def insert_with_id(self, user: User) -> User:
        """
        Give the (unsaved) user a fresh identifier and commit it.

        Retries on an employee_id collision; raises UsernameTaken when the
        collision is on the username instead, and DuplicateIdentifier once
        every attempt has collided.
        """
        for attempt in range(1, self.max_attempts + 1):
            user.employee_id = self.next_candidate()
            self.db.add(user)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                if self._username_exists(user.username):
                    raise UsernameTaken()
                logger.warning(
                    f"Employee ID {user.employee_id} already taken "
                    f"(attempt {attempt}/{self.max_attempts}), retrying"
                )
                continue

            self.db.refresh(user)
            return user

        logger.error(f"Gave up issuing an employee ID for '{user.username}' after {self.max_attempts} attempts")
        raise DuplicateIdentifier()

    def _username_exists(self, username: str) -> bool:
        return self.db.query(User.id).filter(User.username == username).first() is not None
