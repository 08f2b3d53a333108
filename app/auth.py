"""Authentication: password hashing, session tokens and the auth routes."""

import logging
import uuid

from fastapi import APIRouter, Depends, status
from fastapi.security import APIKeyHeader
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from . import schemas, crud, errors
from .database import get_db
from .models import User
from .core import get_settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=get_settings().BCRYPT_ROUNDS,
)
token_header = APIKeyHeader(name="Authorization", auto_error=False)
router = APIRouter(prefix="/users", tags=["auth"])


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Compare a plain password with its hashed value."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Generate a password hash using the configured context."""
    return pwd_context.hash(password)


def generate_token() -> str:
    """Return a new random opaque session token."""
    return str(uuid.uuid4())


def register(db: Session, user_in: schemas.UserRegister) -> User:
    """
    Create a user account.

    Args:
        db (Session): Database session.
        user_in (UserRegister): Validated registration data.

    Raises:
        ConflictError: If the username is taken.

    Returns:
        User: The stored user.
    """
    user = crud.create_user(db, user_in, get_password_hash(user_in.password))
    logger.info("Registered user %s", user.username)
    return user


def login(db: Session, credentials: schemas.UserLogin) -> User:
    """
    Check credentials and start a new session.

    Unknown usernames and wrong passwords fail with the same message,
    and leave every stored token untouched.

    Raises:
        UnauthorizedError: If the credentials do not match a user.

    Returns:
        User: The user, holding a fresh token.
    """
    user = crud.get_user_by_username(db, credentials.username)
    if not user or not verify_password(credentials.password, user.password):
        logger.info("Failed login for %s", credentials.username)
        raise errors.UnauthorizedError.with_message(errors.BAD_CREDENTIALS)
    user = crud.set_user_token(db, user, generate_token())
    logger.info("User %s logged in", user.username)
    return user


def resolve_current_user(db: Session, token: str | None) -> User:
    """
    Find the user holding ``token``.

    Raises:
        UnauthorizedError: If the token is missing, empty or unknown.
    """
    if token and token.lower().startswith("bearer "):
        token = token[len("bearer "):].strip()
    if not token:
        raise errors.UnauthorizedError.with_message(errors.UNAUTHORIZED)
    user = crud.get_user_by_token(db, token)
    if user is None:
        raise errors.UnauthorizedError.with_message(errors.UNAUTHORIZED)
    return user


def update_profile(db: Session, user: User, changes: schemas.UserUpdate) -> User:
    """
    Change the user's name and/or password.

    Only fields given a value are updated; a new password is hashed
    before it is stored.
    """
    values = changes.model_dump(exclude_unset=True, exclude_none=True)
    if "password" in values:
        values["password"] = get_password_hash(values["password"])
    return crud.update_user(db, user, values)


def logout(db: Session, user: User) -> User:
    """Clear the user's token. Logging out twice is harmless."""
    if user.token is None:
        return user
    user = crud.set_user_token(db, user, None)
    logger.info("User %s logged out", user.username)
    return user


def get_current_user(
    token: str | None = Depends(token_header), db: Session = Depends(get_db)
) -> User:
    """Dependency that returns the user authenticated by the request token."""
    return resolve_current_user(db, token)


@router.post(
    "",
    response_model=schemas.DataResponse[schemas.UserOut],
    status_code=status.HTTP_201_CREATED,
)
def register_user(user_in: schemas.UserRegister, db: Session = Depends(get_db)):
    """Register a new user."""

    return {"data": register(db, user_in)}


@router.post("/login", response_model=schemas.DataResponse[schemas.UserWithToken])
def login_user(credentials: schemas.UserLogin, db: Session = Depends(get_db)):
    """Authenticate a user and return them together with a new token."""

    return {"data": login(db, credentials)}


@router.delete("/logout", response_model=schemas.DataResponse[bool])
def logout_user(
    current_user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    """End the current session."""

    logout(db, current_user)
    return {"data": True}
