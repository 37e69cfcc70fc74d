# task_portal/services/tasks.py
"""
Task ledger: admins assign tasks to employees, employees complete their own.
"""

import logging
from datetime import datetime
from typing import List

from sqlalchemy.orm import Session, joinedload

from task_portal.models.task import Task, TaskStatus
from task_portal.models.user import User, UserRole
from task_portal.services.exceptions import (
    AssigneeNotFound,
    TaskNotFoundOrNotOwned,
    ValidationError,
)
from task_portal.utils.auth import Identity

logger = logging.getLogger(__name__)


class TaskLedger:
    def __init__(self, db: Session):
        self.db = db

    def assign(self, title: str, description: str, assigner: Identity, assignee_employee_id: str) -> Task:
        """Create a task for the employee with the given employee ID"""
        title = (title or "").strip()
        if not title:
            raise ValidationError("Task title is required")

        assignee = self.db.query(User).filter(
            User.employee_id == (assignee_employee_id or "").strip()
        ).first()
        if not assignee or assignee.role != UserRole.EMPLOYEE.value:
            raise AssigneeNotFound()

        task = Task(
            title=title,
            description=description or "",
            assigned_to=assignee.id,
            assigned_by=assigner.user_id,
            status=TaskStatus.ASSIGNED,
        )
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)

        logger.info(f"Task {task.id} '{task.title}' assigned to {assignee.employee_id} by '{assigner.username}'")
        return task

    def complete(self, task_id: int, caller: Identity) -> Task:
        """
        Mark the caller's task as completed.

        The status check and the ownership check are one conditional UPDATE,
        so a task moves to Completed at most once. Completing an already
        completed task of your own is a no-op.
        """
        changed = self.db.query(Task).filter(
            Task.id == task_id,
            Task.assigned_to == caller.user_id,
            Task.status == TaskStatus.ASSIGNED,
        ).update(
            {Task.status: TaskStatus.COMPLETED, Task.completed_at: datetime.utcnow()},
            synchronize_session=False,
        )
        self.db.commit()

        task = self.db.query(Task).filter(
            Task.id == task_id,
            Task.assigned_to == caller.user_id,
        ).first()
        if not task:
            raise TaskNotFoundOrNotOwned()

        if changed:
            logger.info(f"Task {task.id} completed by '{caller.username}'")
        return task

    def list_for(self, identity: Identity) -> List[Task]:
        """Admins see every task, employees only their own"""
        query = self.db.query(Task)
        if identity.role == UserRole.ADMIN.value:
            query = query.options(joinedload(Task.assignee), joinedload(Task.assigner))
        else:
            query = query.filter(Task.assigned_to == identity.user_id)
        return query.order_by(Task.id).all()
