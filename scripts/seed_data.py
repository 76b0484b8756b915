from sqlalchemy.orm import Session

from app.application.services.school_service import find_duplicate_school
from app.application.services.security_service import hash_password
from app.application.services.user_service import get_user_by_email
from app.infrastructure.db.models import School, User
from app.infrastructure.db.session import SessionLocal
from app.infrastructure.logging import configure_logging, get_logger

logger = get_logger(__name__)

SEED_USERS = [
    ("kash", "kash@gmail.com", "1234kash"),
    ("john", "john@gmail.com", "1234john"),
]

SEED_SCHOOLS = [
    ("Ali Koffi", "HolyStar Int. School", "0542233516", "Sapeiman", "info@holystar.edu.gh"),
    ("Ama Mensah", "Bright Future Academy", "0201234567", "Kumasi", None),
    ("Kwame Boateng", "Riverside Prep", "+233 24 555 0101", "Takoradi", "admin@riverside.edu.gh"),
]


def create_user_if_missing(db: Session, username: str, email: str, password: str) -> User:
    existing = get_user_by_email(db, email)
    if existing is not None:
        return existing

    user = User(username=username, email=email, hashed_password=hash_password(password), is_active=True)
    db.add(user)
    db.flush()
    return user


def create_school_if_missing(
    db: Session,
    owner_name: str,
    school_name: str,
    school_hotline: str,
    location: str,
    email: str | None,
) -> School:
    school = find_duplicate_school(
        db,
        owner_name=owner_name,
        school_name=school_name,
        school_hotline=school_hotline,
        location=location,
    )
    if school is not None:
        return school

    school = School(
        owner_name=owner_name,
        school_name=school_name,
        school_hotline=school_hotline,
        location=location,
        email=email,
    )
    db.add(school)
    db.flush()
    return school


def seed(db: Session) -> None:
    for username, email, password in SEED_USERS:
        create_user_if_missing(db, username, email, password)
    for owner_name, school_name, school_hotline, location, email in SEED_SCHOOLS:
        create_school_if_missing(db, owner_name, school_name, school_hotline, location, email)
    db.commit()
    logger.info("seed_completed", users=len(SEED_USERS), schools=len(SEED_SCHOOLS))


def main() -> None:
    configure_logging()
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
