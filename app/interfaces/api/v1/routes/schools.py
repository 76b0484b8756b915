from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.errors import NotFoundError, ValidationError
from app.application.services.pagination_service import paginate_scalars
from app.application.services.school_service import (
    SCHOOL_SEARCH_COLUMNS,
    delete_school,
    get_school_or_404,
    list_schools_query,
    parse_school_id,
    register_school,
    serialize_school_response,
    update_school,
)
from app.config import settings
from app.infrastructure.db.models import User
from app.infrastructure.db.session import get_db
from app.interfaces.api.v1.dependencies.auth import require_authenticated, require_feature_access
from app.interfaces.api.v1.dependencies.pagination import get_pagination_params
from app.interfaces.api.v1.dependencies.rate_limit import rate_limited
from app.interfaces.api.v1.schemas.pagination import PaginationParams
from app.interfaces.api.v1.schemas.school import (
    SchoolEnvelope,
    SchoolListEnvelope,
    SchoolRegistration,
    SchoolUpdate,
)

router = APIRouter(prefix="/schools", tags=["schools"])

REGISTRATION_PATH = "/registration"

registration_rate_limit = rate_limited(
    "school-registration",
    limit=settings.registration_rate_limit,
    window_seconds=settings.registration_rate_window_seconds,
)


def _list_schools(db: Session, pagination: PaginationParams) -> dict:
    schools, meta = paginate_scalars(
        db=db,
        base_query=list_schools_query(),
        page=pagination.page,
        limit=pagination.limit,
        search=pagination.search,
        search_columns=SCHOOL_SEARCH_COLUMNS,
    )
    return {
        "message": "Schools retrieved successfully",
        "data": [serialize_school_response(school) for school in schools],
        "pagination": meta,
    }


@router.get(
    "",
    response_model=SchoolListEnvelope,
    summary="List schools (authenticated)",
    description="Same listing as `GET /schools/`, but only for callers presenting a bearer token.",
    responses={400: {"description": "No access without a bearer token"}, 401: {"description": "Unauthorized"}},
)
def get_schools_authenticated(
    _: User = Depends(require_feature_access),
    pagination: PaginationParams = Depends(get_pagination_params),
    db: Session = Depends(get_db),
):
    return _list_schools(db=db, pagination=pagination)


@router.get(
    "/",
    response_model=SchoolListEnvelope,
    summary="List schools",
    description="Paginated school listing. Supports `page`, `limit` and `search` query parameters.",
)
def get_schools(
    pagination: PaginationParams = Depends(get_pagination_params),
    db: Session = Depends(get_db),
):
    return _list_schools(db=db, pagination=pagination)


@router.post(
    REGISTRATION_PATH,
    response_model=SchoolEnvelope,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(registration_rate_limit)],
    summary="Register school",
    description="Register a school. Rate limited per client.",
    responses={
        400: {"description": "Invalid or hostile input"},
        409: {"description": "School already exists"},
        429: {"description": "Too many requests"},
    },
)
def register_school_endpoint(payload: SchoolRegistration, db: Session = Depends(get_db)):
    school = register_school(db=db, payload=payload)
    return {"message": "School registered successfully", "data": serialize_school_response(school)}


@router.api_route(
    REGISTRATION_PATH,
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
def registration_method_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
        headers={"Allow": "POST"},
    )


@router.get(
    "/{school_id}",
    response_model=SchoolEnvelope,
    summary="Get school by id",
    responses={
        400: {"description": "Malformed school id"},
        401: {"description": "Unauthorized"},
        404: {"description": "School not found"},
    },
)
def get_school(
    school_id: str,
    _: User = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    school = get_school_or_404(db=db, school_id=parse_school_id(school_id))
    return {"message": "School retrieved successfully", "data": serialize_school_response(school)}


@router.put(
    "/{school_id}",
    response_model=SchoolEnvelope,
    summary="Update school",
    responses={
        400: {"description": "Malformed school id or invalid fields"},
        401: {"description": "Unauthorized"},
        404: {"description": "School not found"},
        409: {"description": "Update would duplicate another school"},
    },
)
def update_school_endpoint(
    school_id: str,
    payload: SchoolUpdate,
    _: User = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    school = get_school_or_404(db=db, school_id=parse_school_id(school_id))
    updated_school = update_school(db=db, school=school, payload=payload)
    return {"message": "School updated successfully", "data": serialize_school_response(updated_school)}


@router.delete(
    "/{school_id}",
    summary="Delete school (soft delete)",
    responses={404: {"description": "School not found"}},
)
def delete_school_endpoint(school_id: str, db: Session = Depends(get_db)):
    try:
        normalized_id = parse_school_id(school_id)
    except ValidationError as exc:
        raise NotFoundError("School not found") from exc
    school = get_school_or_404(db=db, school_id=normalized_id)
    delete_school(db=db, school=school)
    return {"message": "School deleted successfully"}
