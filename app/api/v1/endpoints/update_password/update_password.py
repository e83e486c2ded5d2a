from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.models.user_models import User
from app.schemas.backend_schemas.password_update_schemas import PasswordUpdateIn
from app.services import user_service
from app.services.dependencies import get_current_user


router = APIRouter(prefix="/update-password", tags=["Update Password"])


@router.put("", status_code=status.HTTP_200_OK)
def update_password(
    payload: PasswordUpdateIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    user_service.change_password(db, user, payload)
    return {"message": "Password updated successfully"}
