import logging

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import desc

from app.core.exceptions import NotFoundError
from app.models.notice_models import Notice, NoticeCategory
from app.schemas.backend_schemas.notice_schemas import NoticeCreate, NoticeUpdate
from app.services.authorization import Caller, ensure, can_create_notice, can_modify_notice
from app.utils.text import required_text

logger = logging.getLogger(__name__)


def get_notice_or_404(db: Session, notice_id: str) -> Notice:
    notice = (
        db.query(Notice)
        .options(selectinload(Notice.author))
        .filter(Notice.id == str(notice_id))
        .first()
    )
    if not notice:
        raise NotFoundError("Notice not found")
    return notice


# -------------------------
# CREATE
# -------------------------
def create_notice(db: Session, caller: Caller, payload: NoticeCreate) -> Notice:
    ensure(can_create_notice(caller))

    notice = Notice(
        title=required_text(payload.title, "Title"),
        content=required_text(payload.content, "Content"),
        category=payload.category,
        attachment_url=payload.attachment_url,
        attachment_type=payload.attachment_type,
        thumbnail_url=payload.thumbnail_url,
        author_id=caller.id,
    )
    db.add(notice)
    db.commit()
    db.refresh(notice)

    logger.info("Notice created id=%s category=%s author_id=%s", notice.id, notice.category.value, caller.id)
    return notice


# -------------------------
# FEED + GET BY ID (all authenticated users)
# -------------------------
def list_notices(
    db: Session,
    category: NoticeCategory | None = None,
    skip: int = 0,
    limit: int | None = None,
) -> list[Notice]:
    query = db.query(Notice).options(selectinload(Notice.author))
    if category is not None:
        query = query.filter(Notice.category == category)
    query = query.order_by(desc(Notice.created_at)).offset(skip)
    # no limit returns the whole feed
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def get_notice(db: Session, notice_id: str) -> Notice:
    return get_notice_or_404(db, notice_id)


# -------------------------
# UPDATE + DELETE (author, or SUPER_ADMIN)
# -------------------------
def update_notice(db: Session, caller: Caller, notice_id: str, payload: NoticeUpdate) -> Notice:
    notice = get_notice_or_404(db, notice_id)
    ensure(can_modify_notice(caller, notice.author_id), "You can only edit your own notices")

    data = payload.model_dump(exclude_unset=True)

    # title/content/category cannot be cleared
    for field in ("title", "content", "category"):
        if field in data and data[field] is None:
            data.pop(field)
    if "title" in data:
        data["title"] = required_text(data["title"], "Title")
    if "content" in data:
        data["content"] = required_text(data["content"], "Content")

    for k, v in data.items():
        setattr(notice, k, v)

    db.commit()
    db.refresh(notice)
    return notice


def delete_notice(db: Session, caller: Caller, notice_id: str) -> None:
    notice = get_notice_or_404(db, notice_id)
    ensure(can_modify_notice(caller, notice.author_id), "You can only delete your own notices")

    db.delete(notice)
    db.commit()
    logger.info("Notice deleted id=%s by user_id=%s", notice_id, caller.id)
