from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from task_portal.database import get_db
from task_portal.schemas.task import TaskSubmit, TaskActionResponse
from task_portal.services.tasks import TaskLedger
from task_portal.utils.auth import Identity, require_employee

router = APIRouter(prefix="/employee")


@router.post("/submit-task", response_model=TaskActionResponse)
def submit_task(submission: TaskSubmit, db: Session = Depends(get_db), employee: Identity = Depends(require_employee)):
    """Mark one of the caller's own tasks as completed"""
    task = TaskLedger(db).complete(submission.task_id, employee)
    return {"message": "Task submitted successfully", "task": task}
