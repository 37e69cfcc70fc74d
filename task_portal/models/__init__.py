from .user import User, UserRole
from .task import Task, TaskStatus

__all__ = ["User", "UserRole", "Task", "TaskStatus"]
