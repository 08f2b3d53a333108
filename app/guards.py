"""Ownership checks for contacts and addresses.

A contact is reachable only by its owner and an address only through
its contact. Missing and foreign-owned rows fail the same way, with
``NotFoundError``, so callers cannot probe for other users' data.
"""

import logging

from sqlalchemy.orm import Session

from . import crud, errors, models

logger = logging.getLogger(__name__)


def get_owned_contact(db: Session, user: models.User, contact_id: int) -> models.Contact:
    """
    Return the contact if it belongs to ``user``.

    Args:
        db (Session): Database session.
        user (User): Requesting user.
        contact_id (int): Contact identifier.

    Raises:
        NotFoundError: If the contact does not exist or has another owner.

    Returns:
        Contact: The owned contact.
    """
    contact = crud.get_contact(db, contact_id, user)
    if contact is None:
        logger.debug("Contact %s not found for user %s", contact_id, user.id)
        raise errors.NotFoundError.with_message(errors.NOT_FOUND)
    return contact


def get_owned_address(
    db: Session, contact: models.Contact, address_id: int
) -> models.Address:
    """
    Return the address if it belongs to ``contact``.

    ``contact`` must come from :func:`get_owned_contact`.

    Raises:
        NotFoundError: If the address does not exist or has another contact.
    """
    address = crud.get_address(db, address_id, contact)
    if address is None:
        logger.debug("Address %s not found for contact %s", address_id, contact.id)
        raise errors.NotFoundError.with_message(errors.NOT_FOUND)
    return address
