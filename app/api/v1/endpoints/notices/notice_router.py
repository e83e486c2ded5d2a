from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.models.notice_models import NoticeCategory
from app.schemas.backend_schemas.notice_schemas import NoticeCreate, NoticeResponse, NoticeUpdate
from app.schemas.backend_schemas.utils_schema import MessageResponse
from app.services.authorization import Caller
from app.services.dependencies import get_caller
from app.services.notice_service import (
    create_notice,
    list_notices,
    get_notice,
    update_notice,
    delete_notice,
)
from app.services.push_notification_service import send_notice_push

router = APIRouter(prefix="/notices", tags=["Notices"])


@router.get("", response_model=list[NoticeResponse])
def get_notices(
    category: NoticeCategory | None = Query(None),
    skip: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1, le=500),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return list_notices(db=db, category=category, skip=skip, limit=limit)


@router.post("", response_model=NoticeResponse, status_code=status.HTTP_201_CREATED)
def publish_notice(
    payload: NoticeCreate,
    background_tasks: BackgroundTasks,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    notice = create_notice(db=db, caller=caller, payload=payload)
    # push runs after the response; failures never reach the client
    background_tasks.add_task(send_notice_push, str(notice.id), notice.title)
    return notice


@router.get("/{notice_id}", response_model=NoticeResponse)
def get_notice_by_id(
    notice_id: str,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return get_notice(db=db, notice_id=notice_id)


@router.put("/{notice_id}", response_model=NoticeResponse)
def edit_notice(
    notice_id: str,
    payload: NoticeUpdate,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return update_notice(db=db, caller=caller, notice_id=notice_id, payload=payload)


@router.delete("/{notice_id}", response_model=MessageResponse)
def remove_notice(
    notice_id: str,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    delete_notice(db=db, caller=caller, notice_id=notice_id)
    return {"message": "Notice deleted successfully"}
