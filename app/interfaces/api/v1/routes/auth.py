from fastapi import APIRouter, Depends
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.application.errors import ForbiddenError, ValidationError
from app.application.services.security_service import authenticate_user, create_access_token
from app.application.services.user_service import register_user, serialize_user_response
from app.infrastructure.db.session import get_db
from app.infrastructure.logging import get_logger
from app.interfaces.api.v1.schemas.auth import AuthRequest, LookupEnvelope, TokenEnvelope
from app.interfaces.api.v1.schemas.user import UserEnvelope, UserRegister

router = APIRouter(tags=["auth"])
logger = get_logger(__name__)

ALL_FIELDS_REQUIRED = "All fields are required"


def _as_registration(payload: AuthRequest) -> UserRegister:
    if payload.username is None or payload.email is None or payload.password is None:
        raise ValidationError(ALL_FIELDS_REQUIRED)
    try:
        return UserRegister(username=payload.username, email=payload.email, password=payload.password)
    except PydanticValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


def _register(db: Session, payload: UserRegister) -> dict:
    user = register_user(db=db, payload=payload)
    return {"message": "User registered successfully", "data": serialize_user_response(user)}


def _login(db: Session, payload: AuthRequest) -> dict:
    if payload.email is None or payload.password is None:
        raise ValidationError(ALL_FIELDS_REQUIRED)
    user = authenticate_user(db=db, email=payload.email, password=payload.password)
    if user is None:
        logger.info("login_failed")
        raise ForbiddenError("Wrong credentials!")
    return {"message": "Login successful", "data": {"access_token": create_access_token(user.id)}}


@router.post(
    "/auth",
    response_model=UserEnvelope | TokenEnvelope,
    summary="Sign up or log in",
    description=(
        "A body carrying `username` registers a new user (username, email and password required). "
        "Any other body logs in with email and password and returns a bearer token."
    ),
    responses={400: {"description": "Missing or invalid fields"}, 403: {"description": "Wrong credentials"}},
)
def authenticate(payload: AuthRequest, db: Session = Depends(get_db)):
    if payload.is_registration:
        return _register(db=db, payload=_as_registration(payload))
    return _login(db=db, payload=payload)


@router.post(
    "/signup",
    response_model=UserEnvelope,
    summary="Register user",
    responses={400: {"description": "Missing or invalid fields"}, 409: {"description": "User already exists"}},
)
def signup(payload: UserRegister, db: Session = Depends(get_db)):
    return _register(db=db, payload=payload)


@router.post(
    "/singup",
    response_model=UserEnvelope | LookupEnvelope,
    summary="Legacy signup / account lookup",
    description="Kept for old clients. Registers when `username` is present, otherwise reports whether the account exists.",
    include_in_schema=False,
)
def legacy_signup(payload: AuthRequest, db: Session = Depends(get_db)):
    if payload.is_registration:
        return _register(db=db, payload=_as_registration(payload))
    if payload.email is None or payload.password is None:
        return {"message": "No user found!"}
    user = authenticate_user(db=db, email=payload.email, password=payload.password)
    if user is None:
        return {"message": "No user found!"}
    return {"message": "User found", "data": {"access_token": create_access_token(user.id)}}
