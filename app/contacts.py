"""Contact management routes for the Contacts API."""

import math

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from . import schemas, crud
from .core import get_settings
from .database import get_db
from .auth import get_current_user
from .guards import get_owned_contact
from .models import User

router = APIRouter(prefix="/contacts", tags=["contacts"])
settings = get_settings()


@router.post(
    "",
    response_model=schemas.DataResponse[schemas.ContactOut],
    status_code=status.HTTP_201_CREATED,
)
def create_contact(
    contact_in: schemas.ContactCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create a new contact owned by the current user.

    Args:
        contact_in (ContactCreate): Contact input data.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Returns:
        DataResponse[ContactOut]: Created contact.
    """
    return {"data": crud.create_contact(db, contact_in, current_user)}


@router.get("", response_model=schemas.ContactPage)
def search_contacts(
    name: str | None = Query(None),
    email: str | None = Query(None),
    phone: str | None = Query(None),
    page: int = Query(1, ge=1),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Search the current user's contacts.

    ``name`` matches the first or last name; ``email`` and ``phone``
    match their own column. Every filter is a substring match and
    supplied filters are combined. A page past the end is empty but
    still reports the total.

    Args:
        name (str | None): Fragment of the first or last name.
        email (str | None): Fragment of the email.
        phone (str | None): Fragment of the phone number.
        page (int): 1-based page number.
        size (int): Page size.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Returns:
        ContactPage: Matching contacts and pagination details.
    """
    items, total = crud.search_contacts(
        db,
        user=current_user,
        name=name,
        email=email,
        phone=phone,
        page=page,
        size=size,
    )
    return {
        "data": items,
        "meta": {
            "total": total,
            "current_page": page,
            "size": size,
            "last_page": max(1, math.ceil(total / size)),
        },
    }


@router.get("/{contact_id}", response_model=schemas.DataResponse[schemas.ContactOut])
def get_contact(
    contact_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Retrieve a single contact by ID for the current user.

    Raises:
        NotFoundError: If the contact is missing or not owned by the user.
    """
    return {"data": get_owned_contact(db, current_user, contact_id)}


@router.put("/{contact_id}", response_model=schemas.DataResponse[schemas.ContactOut])
def update_contact(
    contact_id: int,
    changes: schemas.ContactUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update an existing contact.

    Only fields provided in the request will be updated.

    Args:
        contact_id (int): Contact identifier.
        changes (ContactUpdate): Fields to update.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Raises:
        NotFoundError: If the contact is missing or not owned by the user.

    Returns:
        DataResponse[ContactOut]: Updated contact.
    """
    contact = get_owned_contact(db, current_user, contact_id)
    return {
        "data": crud.update_contact(db, contact, changes.model_dump(exclude_unset=True))
    }


@router.delete("/{contact_id}", response_model=schemas.DataResponse[bool])
def remove_contact(
    contact_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete a contact owned by the current user, with its addresses.

    Raises:
        NotFoundError: If the contact is missing or not owned by the user.
    """
    contact = get_owned_contact(db, current_user, contact_id)
    crud.delete_contact(db, contact)
    return {"data": True}
