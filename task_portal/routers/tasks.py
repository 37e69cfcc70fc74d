# task_portal/routers/tasks.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from task_portal.database import get_db
from task_portal.models.task import Task
from task_portal.schemas.task import TaskOut, TaskDetailOut
from task_portal.services.tasks import TaskLedger
from task_portal.utils.auth import Identity, get_current_identity

router = APIRouter()


def task_to_detail(task: Task) -> dict:
    """Flatten a task and its assignment edges for the admin listing"""
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "status": task.status,
        "assigned_to": task.assigned_to,
        "assigned_by": task.assigned_by,
        "created_at": task.created_at,
        "completed_at": task.completed_at,
        "assigned_to_username": task.assignee.username if task.assignee else None,
        "assigned_to_employee_id": task.assignee.employee_id if task.assignee else None,
        "assigned_by_username": task.assigner.username if task.assigner else None,
    }


@router.get("/tasks")
def get_tasks(db: Session = Depends(get_db), identity: Identity = Depends(get_current_identity)):
    """Admins get every task, employees only the ones assigned to them"""
    tasks = TaskLedger(db).list_for(identity)
    if identity.is_admin:
        return [TaskDetailOut(**task_to_detail(task)) for task in tasks]
    return [TaskOut.model_validate(task) for task in tasks]
