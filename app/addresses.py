"""Address routes, nested under the contact they belong to.

Every handler resolves the contact through the ownership guard before
touching an address, so an address is never reachable by anyone but
the owner of its contact.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from . import schemas, crud
from .database import get_db
from .auth import get_current_user
from .guards import get_owned_address, get_owned_contact
from .models import User

router = APIRouter(prefix="/contacts/{contact_id}/addresses", tags=["addresses"])


@router.post(
    "",
    response_model=schemas.DataResponse[schemas.AddressOut],
    status_code=status.HTTP_201_CREATED,
)
def create_address(
    contact_id: int,
    address_in: schemas.AddressCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Add an address to one of the current user's contacts.

    Args:
        contact_id (int): Owning contact identifier.
        address_in (AddressCreate): Address data.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Returns:
        DataResponse[AddressOut]: Created address.
    """
    contact = get_owned_contact(db, current_user, contact_id)
    return {"data": crud.create_address(db, address_in, contact)}


@router.get("", response_model=schemas.DataResponse[List[schemas.AddressOut]])
def list_addresses(
    contact_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List every address of the contact."""
    contact = get_owned_contact(db, current_user, contact_id)
    return {"data": crud.list_addresses(db, contact)}


@router.get(
    "/{address_id}", response_model=schemas.DataResponse[schemas.AddressOut]
)
def get_address(
    contact_id: int,
    address_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Retrieve one address of a contact owned by the current user.

    Args:
        contact_id (int): Owning contact identifier.
        address_id (int): Address identifier.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Raises:
        NotFoundError: If the contact or the address is not reachable.

    Returns:
        DataResponse[AddressOut]: Address data.
    """
    contact = get_owned_contact(db, current_user, contact_id)
    return {"data": get_owned_address(db, contact, address_id)}


@router.put(
    "/{address_id}", response_model=schemas.DataResponse[schemas.AddressOut]
)
def update_address(
    contact_id: int,
    address_id: int,
    changes: schemas.AddressUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update an address; only fields provided in the request change.

    Raises:
        NotFoundError: If the contact or the address is not reachable.
    """
    contact = get_owned_contact(db, current_user, contact_id)
    address = get_owned_address(db, contact, address_id)
    return {
        "data": crud.update_address(db, address, changes.model_dump(exclude_unset=True))
    }


@router.delete("/{address_id}", response_model=schemas.DataResponse[bool])
def remove_address(
    contact_id: int,
    address_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete an address of a contact owned by the current user.

    Args:
        contact_id (int): Owning contact identifier.
        address_id (int): Address identifier.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Raises:
        NotFoundError: If the contact or the address is not reachable.

    Returns:
        DataResponse[bool]: Deletion status.
    """
    contact = get_owned_contact(db, current_user, contact_id)
    address = get_owned_address(db, contact, address_id)
    crud.delete_address(db, address)
    return {"data": True}
