from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.database import get_db
from app.schemas.backend_schemas.user_schemas import (
    FacultyInviteSchema,
    InviteResponse,
    UserResponse,
)
from app.schemas.backend_schemas.utils_schema import MessageResponse
from app.services.authorization import Caller
from app.services.dependencies import get_caller
from app.services.user_service import list_faculty, invite_faculty, delete_user

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=list[UserResponse])
def get_faculty(
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return list_faculty(db=db, caller=caller)


@router.post("", response_model=InviteResponse, status_code=status.HTTP_201_CREATED)
def invite_user(
    payload: FacultyInviteSchema,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    user, temp_password = invite_faculty(db=db, caller=caller, payload=payload)
    return {
        "message": "Faculty member invited successfully",
        "user": user,
        "debug_password": temp_password if settings.is_development else None,
    }


@router.delete("/{user_id}", response_model=MessageResponse)
def remove_user(
    user_id: str,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    delete_user(db=db, caller=caller, user_id=user_id)
    return {"message": "User deleted successfully"}
