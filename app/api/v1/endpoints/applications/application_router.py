from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.schemas.backend_schemas.application_schemas import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStatusUpdate,
    RemarkCreate,
    RemarkResponse,
)
from app.services.authorization import Caller
from app.services.dependencies import get_caller
from app.services.application_service import (
    create_application,
    list_applications,
    get_application,
    set_application_status,
    add_remark,
)

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("", response_model=list[ApplicationResponse])
def get_applications(
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return list_applications(db=db, caller=caller)


@router.post("", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
def submit_application(
    payload: ApplicationCreate,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return create_application(db=db, caller=caller, payload=payload)


@router.get("/{application_id}", response_model=ApplicationResponse)
def get_application_by_id(
    application_id: str,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return get_application(db=db, caller=caller, application_id=application_id)


@router.put("/{application_id}", response_model=ApplicationResponse)
def update_application_status(
    application_id: str,
    payload: ApplicationStatusUpdate,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return set_application_status(
        db=db, caller=caller, application_id=application_id, new_status=payload.status
    )


@router.post("/{application_id}", response_model=RemarkResponse, status_code=status.HTTP_201_CREATED)
def add_application_remark(
    application_id: str,
    payload: RemarkCreate,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return add_remark(db=db, caller=caller, application_id=application_id, content=payload.content)
