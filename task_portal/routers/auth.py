from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from task_portal.config.settings import settings
from task_portal.database import get_db
from task_portal.models.user import UserRole
from task_portal.schemas.user import UserCreate, UserLogin, UserOut, SignupResponse, LoginResponse
from task_portal.services.credentials import CredentialStore
from task_portal.utils.auth import Identity, get_current_identity
from task_portal.utils.security import create_access_token

router = APIRouter()


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


@router.post("/signup", response_model=SignupResponse)
def signup(user: UserCreate, db: Session = Depends(get_db)):
    """Employee self-signup; returns the issued employee ID"""
    new_user = CredentialStore(db).create_user(user.username, user.password, role=UserRole.EMPLOYEE)
    return {
        "message": "Signup successful! Please login.",
        "employee_id": new_user.employee_id,
    }


@router.post("/login", response_model=LoginResponse)
def login(user: UserLogin, response: Response, db: Session = Depends(get_db)):
    db_user = CredentialStore(db).verify(user.username, user.password)

    token = create_access_token(data={"sub": str(db_user.id), "role": db_user.role})
    _set_session_cookie(response, token)
    return {
        "message": "Login successful",
        "role": db_user.role,
        "user": db_user,
    }


@router.api_route("/logout", methods=["GET", "POST"])
def logout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out"}


@router.get("/me", response_model=UserOut)
def get_current_user_info(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    """Get current user information"""
    return CredentialStore(db).get_user(identity.user_id)
