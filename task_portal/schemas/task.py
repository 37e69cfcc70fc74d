from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional
from task_portal.models.task import TaskStatus

class TaskAssign(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    employee_id: str = Field(..., alias="employeeId", min_length=1)

    model_config = {
        "populate_by_name": True
    }

    @field_validator('title')
    @classmethod
    def title_not_empty(cls, v):
        if not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip()

    @field_validator('description', mode='before')
    @classmethod
    def description_default(cls, v):
        return v or ""

class TaskSubmit(BaseModel):
    # Anything outside a signed 64-bit integer column cannot be a task
    task_id: int = Field(..., alias="taskId", ge=1, le=2**63 - 1)

    model_config = {
        "populate_by_name": True
    }

class TaskOut(BaseModel):
    id: int
    title: str
    description: str
    status: TaskStatus
    assigned_to: int
    assigned_by: int
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }

class TaskDetailOut(TaskOut):
    """Admin view with the display names of both ends of the assignment"""
    assigned_to_username: Optional[str] = None
    assigned_to_employee_id: Optional[str] = None
    assigned_by_username: Optional[str] = None

class TaskActionResponse(BaseModel):
    message: str
    task: TaskOut
