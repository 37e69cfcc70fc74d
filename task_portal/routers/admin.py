# task_portal/routers/admin.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from task_portal.database import get_db
from task_portal.models.user import UserRole
from task_portal.schemas.user import UserCreate, EmployeeOut, PromoteRequest, PromoteResponse, SignupResponse
from task_portal.schemas.task import TaskAssign, TaskActionResponse
from task_portal.services.credentials import CredentialStore
from task_portal.services.tasks import TaskLedger
from task_portal.utils.auth import Identity, require_admin

router = APIRouter(prefix="/admin")


@router.post("/create-employee", response_model=SignupResponse)
def create_employee(user: UserCreate, db: Session = Depends(get_db), admin: Identity = Depends(require_admin)):
    """Create an employee account on someone's behalf"""
    new_user = CredentialStore(db).create_user(user.username, user.password, role=UserRole.EMPLOYEE)
    return {
        "message": "Employee created successfully",
        "employee_id": new_user.employee_id,
    }


@router.post("/assign-task", response_model=TaskActionResponse)
def assign_task(task: TaskAssign, db: Session = Depends(get_db), admin: Identity = Depends(require_admin)):
    """Assign a new task to an employee, addressed by employee ID"""
    new_task = TaskLedger(db).assign(task.title, task.description, admin, task.employee_id)
    return {"message": "Task assigned successfully", "task": new_task}


@router.get("/employees", response_model=List[EmployeeOut])
def list_employees(db: Session = Depends(get_db), admin: Identity = Depends(require_admin)):
    return CredentialStore(db).list_employees()


@router.post("/promote", response_model=PromoteResponse)
def promote_employee(request: PromoteRequest, db: Session = Depends(get_db), admin: Identity = Depends(require_admin)):
    user = CredentialStore(db).promote(request.employee_id)
    return {"message": "Employee promoted to admin", "user": user}
