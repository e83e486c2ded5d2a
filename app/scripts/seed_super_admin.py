import os

from app.db.database import Base, SessionLocal, engine
from app.models.user_models import User, UserRole
from app.models import notice_models, application_models, remark_models  # noqa: F401
from app.utils.hashing import get_password_hash
from app.utils.logger import logger

DEFAULT_EMAIL = "hod@department.edu"


def seed_super_admin(db, email: str, password: str, name: str = "Head of Department") -> User:
    """Create the HOD account, or leave an existing one untouched."""
    user = db.query(User).filter(User.email == email).first()
    if user:
        return user

    user = User(
        email=email,
        name=name,
        password=get_password_hash(password),
        role=UserRole.SUPER_ADMIN,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def main():
    email = os.getenv("SEED_ADMIN_EMAIL", DEFAULT_EMAIL).strip().lower()
    password = os.getenv("SEED_ADMIN_PASSWORD")
    if not password:
        raise RuntimeError("SEED_ADMIN_PASSWORD is missing in env")

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        user = seed_super_admin(db, email, password)
    finally:
        db.close()

    logger.info("Super admin ready: %s (id=%s)", user.email, user.id)
    print("Please change this password after first login!")


if __name__ == "__main__":
    main()
