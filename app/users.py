"""User profile routes for the Contacts API."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .auth import get_current_user, update_profile
from .database import get_db
from .models import User
from . import schemas

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/current", response_model=schemas.DataResponse[schemas.UserOut])
def read_current(current_user: User = Depends(get_current_user)):
    """
    Retrieve details of the currently authenticated user.

    Args:
        current_user (User): User resolved from the request token.

    Returns:
        DataResponse[UserOut]: User profile information.
    """
    return {"data": current_user}


@router.patch("/current", response_model=schemas.DataResponse[schemas.UserOut])
def update_current(
    changes: schemas.UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Update the name and/or password of the authenticated user.

    Args:
        changes (UserUpdate): Fields to change.
        current_user (User): Authenticated user.
        db (Session): Database session.

    Returns:
        DataResponse[UserOut]: Updated user profile.
    """
    return {"data": update_profile(db, current_user, changes)}
