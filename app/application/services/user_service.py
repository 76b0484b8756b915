from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.application.errors import ConflictError
from app.application.services.security_service import hash_password
from app.infrastructure.db.models import User
from app.infrastructure.logging import get_logger
from app.interfaces.api.v1.schemas.user import UserRegister

logger = get_logger(__name__)

DUPLICATE_USER_MESSAGE = "User already exists"


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def find_conflicting_user(db: Session, *, username: str, email: str) -> User | None:
    return db.execute(
        select(User).where(or_(User.username == username, User.email == email))
    ).scalars().first()


def register_user(db: Session, payload: UserRegister) -> User:
    if find_conflicting_user(db, username=payload.username, email=payload.email) is not None:
        raise ConflictError(DUPLICATE_USER_MESSAGE)

    user = User(
        username=payload.username,
        email=payload.email,
        hashed_password=hash_password(payload.password),
        is_active=True,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(DUPLICATE_USER_MESSAGE) from exc
    db.refresh(user)
    logger.info("user_registered", user_id=user.id)
    return user


def serialize_user_response(user: User) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
    }
