from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.database import get_db
from app.models.user_models import User
from app.schemas.backend_schemas.user_schemas import (
    StudentRegisterSchema,
    RegisterResponse,
    LoginSchema,
    TokenResponse,
    UserResponse,
)
from app.schemas.backend_schemas.utils_schema import (
    ForgetPasswordSchema,
    ForgetPasswordResponse,
    ResetPasswordSchema,
    MessageResponse,
)
from app.services import user_service
from app.services.dependencies import create_user_access_token, get_current_user


router = APIRouter(prefix="/auth", tags=["Auth"])

RESET_REQUESTED_MESSAGE = "If an account exists with this email, a password reset link has been sent"


@router.post("/register-student", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register_student(payload: StudentRegisterSchema, db: Session = Depends(get_db)):
    user = user_service.register_student(db, payload)
    return {"message": "Registration successful", "user": user}


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginSchema, db: Session = Depends(get_db)):
    user = user_service.authenticate(db, payload.email, payload.password)
    return {
        "access_token": create_user_access_token(user),
        "token_type": "bearer",
        "user": user,
    }


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    return user


@router.post("/logout", response_model=MessageResponse)
def logout(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    user_service.logout(db, user)
    return {"message": "Logged out successfully"}


@router.post("/forgot-password", response_model=ForgetPasswordResponse)
def forgot_password(payload: ForgetPasswordSchema, db: Session = Depends(get_db)):
    reset_token = user_service.request_password_reset(db, payload.email)
    return {
        "message": RESET_REQUESTED_MESSAGE,
        "debug_token": reset_token if settings.is_development else None,
    }


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(payload: ResetPasswordSchema, db: Session = Depends(get_db)):
    user_service.reset_password(db, payload.token, payload.password)
    return {"message": "Password reset successful"}
