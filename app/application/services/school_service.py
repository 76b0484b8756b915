import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from app.application.errors import ConflictError, NotFoundError, ValidationError
from app.infrastructure.db.models import School
from app.infrastructure.logging import get_logger
from app.interfaces.api.v1.schemas.school import SchoolRegistration, SchoolUpdate

logger = get_logger(__name__)

SCHOOL_SEARCH_COLUMNS = [School.school_name, School.owner_name, School.location]
DUPLICATE_SCHOOL_MESSAGE = "School already exists"


def parse_school_id(raw_id: str) -> str:
    try:
        return str(uuid.UUID(raw_id))
    except ValueError as exc:
        raise ValidationError("Invalid school id") from exc


def serialize_school_response(school: School) -> dict:
    return {
        "id": school.id,
        "owner_name": school.owner_name,
        "school_name": school.school_name,
        "school_hotline": school.school_hotline,
        "location": school.location,
        "email": school.email,
        "created_at": school.created_at,
        "updated_at": school.updated_at,
    }


def list_schools_query() -> Select:
    return select(School).where(School.deleted_at.is_(None)).order_by(School.created_at, School.id)


def get_school_by_id(db: Session, school_id: str) -> School | None:
    return db.execute(
        select(School).where(School.id == school_id, School.deleted_at.is_(None))
    ).scalar_one_or_none()


def get_school_or_404(db: Session, school_id: str) -> School:
    school = get_school_by_id(db=db, school_id=school_id)
    if school is None:
        raise NotFoundError("School not found")
    return school


def find_duplicate_school(
    db: Session,
    *,
    owner_name: str,
    school_name: str,
    school_hotline: str,
    location: str,
    exclude_id: str | None = None,
) -> School | None:
    query = select(School).where(
        School.owner_name == owner_name,
        School.school_name == school_name,
        School.school_hotline == school_hotline,
        School.location == location,
        School.deleted_at.is_(None),
    )
    if exclude_id is not None:
        query = query.where(School.id != exclude_id)
    return db.execute(query).scalars().first()


def _commit_school(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("school_conflict_on_commit")
        raise ConflictError(DUPLICATE_SCHOOL_MESSAGE) from exc


def register_school(db: Session, payload: SchoolRegistration) -> School:
    duplicate = find_duplicate_school(
        db,
        owner_name=payload.owner_name,
        school_name=payload.school_name,
        school_hotline=payload.school_hotline,
        location=payload.location,
    )
    if duplicate is not None:
        raise ConflictError(DUPLICATE_SCHOOL_MESSAGE)

    school = School(
        owner_name=payload.owner_name,
        school_name=payload.school_name,
        school_hotline=payload.school_hotline,
        location=payload.location,
        email=payload.email,
    )
    db.add(school)
    _commit_school(db)
    db.refresh(school)
    logger.info("school_registered", school_id=school.id)
    return school


def update_school(db: Session, school: School, payload: SchoolUpdate) -> School:
    owner_name = payload.owner_name if payload.owner_name is not None else school.owner_name
    school_name = payload.school_name if payload.school_name is not None else school.school_name
    school_hotline = payload.school_hotline if payload.school_hotline is not None else school.school_hotline
    location = payload.location if payload.location is not None else school.location

    duplicate = find_duplicate_school(
        db,
        owner_name=owner_name,
        school_name=school_name,
        school_hotline=school_hotline,
        location=location,
        exclude_id=school.id,
    )
    if duplicate is not None:
        raise ConflictError(DUPLICATE_SCHOOL_MESSAGE)

    school.owner_name = owner_name
    school.school_name = school_name
    school.school_hotline = school_hotline
    school.location = location
    if "email" in payload.model_fields_set:
        school.email = payload.email

    _commit_school(db)
    db.refresh(school)
    logger.info("school_updated", school_id=school.id, fields=sorted(payload.model_fields_set))
    return school


def delete_school(db: Session, school: School) -> None:
    school.deleted_at = datetime.now(timezone.utc)
    db.commit()
    logger.info("school_deleted", school_id=school.id)
