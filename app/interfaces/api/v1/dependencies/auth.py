from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.application.errors import UnauthorizedError, ValidationError
from app.application.services.security_service import get_user_for_token
from app.infrastructure.db.models import User
from app.infrastructure.db.session import get_db

UNAUTHORIZED_MESSAGE = "Unauthorized access"
NO_ACCESS_MESSAGE = "You don't have access to this feature"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth", auto_error=False)


def get_current_user(token: str | None = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    if token is None:
        raise UnauthorizedError(UNAUTHORIZED_MESSAGE)
    user = get_user_for_token(db=db, token=token)
    if user is None:
        raise UnauthorizedError(UNAUTHORIZED_MESSAGE)
    return user


def require_authenticated(current_user: User = Depends(get_current_user)) -> User:
    return current_user


def require_feature_access(token: str | None = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    """Gate for endpoints that answer anonymous callers with 400 rather than 401."""
    if token is None:
        raise ValidationError(NO_ACCESS_MESSAGE)
    return get_current_user(token=token, db=db)
