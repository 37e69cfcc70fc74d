from .user import UserCreate, UserLogin, UserOut, EmployeeOut, PromoteRequest, SignupResponse, LoginResponse, PromoteResponse
from .task import TaskAssign, TaskSubmit, TaskOut, TaskDetailOut, TaskActionResponse, TaskStatus
