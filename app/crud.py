"""CRUD operations for users, contacts and addresses.

This module contains database interaction logic for the three
entities, isolated from FastAPI route handlers. Contact queries are
always scoped to the owning user and address queries to the owning
contact.
"""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import errors, models, schemas

logger = logging.getLogger(__name__)


def create_user(
    db: Session, user_in: schemas.UserRegister, hashed_password: str
) -> models.User:
    """
    Create and persist a new user.

    Args:
        db (Session): SQLAlchemy database session.
        user_in (UserRegister): Incoming user data.
        hashed_password (str): Securely hashed password.

    Raises:
        ConflictError: If a user with the same username already exists.

    Returns:
        User: Newly created user instance.
    """
    if get_user_by_username(db, user_in.username) is not None:
        raise errors.ConflictError({"username": [errors.USERNAME_TAKEN]})

    user = models.User(
        username=user_in.username,
        password=hashed_password,
        name=user_in.name,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise errors.ConflictError({"username": [errors.USERNAME_TAKEN]})
    db.refresh(user)
    return user


def get_user_by_username(db: Session, username: str) -> models.User | None:
    """
    Retrieve a user by username.

    Args:
        db (Session): Database session.
        username (str): Login name.

    Returns:
        User | None: User if found, otherwise ``None``.
    """
    return db.execute(
        select(models.User).where(models.User.username == username)
    ).scalar_one_or_none()


def get_user_by_token(db: Session, token: str) -> models.User | None:
    """
    Retrieve the user currently holding ``token``.

    Args:
        db (Session): Database session.
        token (str): Opaque session token.

    Returns:
        User | None: User if found, otherwise ``None``.
    """
    return db.execute(
        select(models.User).where(models.User.token == token)
    ).scalar_one_or_none()


def set_user_token(db: Session, user: models.User, token: str | None) -> models.User:
    """
    Store a new session token for the user, or clear it with ``None``.

    Args:
        db (Session): Database session.
        user (User): Target user.
        token (str | None): New token value.

    Returns:
        User: Updated user instance.
    """
    user.token = token
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_user(db: Session, user: models.User, changes: dict) -> models.User:
    """
    Apply profile changes to a user.

    Args:
        db (Session): Database session.
        user (User): Target user.
        changes (dict): Column values to set; ``password`` must already be hashed.

    Returns:
        User: Updated user instance.
    """
    for key, value in changes.items():
        setattr(user, key, value)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_contact(
    db: Session, contact_in: schemas.ContactCreate, user: models.User
) -> models.Contact:
    """
    Create a new contact owned by the given user.

    Args:
        db (Session): Database session.
        contact_in (ContactCreate): Contact data.
        user (User): Owner of the contact.

    Returns:
        Contact: Newly created contact.
    """
    contact = models.Contact(**contact_in.model_dump(), user_id=user.id)
    db.add(contact)
    db.commit()
    db.refresh(contact)
    logger.info("User %s created contact %s", user.id, contact.id)
    return contact


def get_contact(db: Session, contact_id: int, user: models.User):
    """
    Retrieve a single contact owned by the given user.

    Args:
        db (Session): Database session.
        contact_id (int): Contact identifier.
        user (User): Contact owner.

    Returns:
        Contact | None: Contact if found, otherwise ``None``.
    """
    return db.execute(
        select(models.Contact).where(
            models.Contact.id == contact_id,
            models.Contact.user_id == user.id,
        )
    ).scalar_one_or_none()


def search_contacts(
    db: Session,
    user: models.User,
    name: str | None = None,
    email: str | None = None,
    phone: str | None = None,
    page: int = 1,
    size: int = 10,
):
    """
    Search the user's contacts and return one page of matches.

    ``name`` matches either the first or the last name. All supplied
    filters are substring matches, case-insensitive, combined with AND.

    Args:
        db (Session): Database session.
        user (User): Contact owner.
        name (str | None): Fragment of the first or last name.
        email (str | None): Fragment of the email address.
        phone (str | None): Fragment of the phone number.
        page (int): 1-based page number.
        size (int): Page size.

    Returns:
        tuple[list[Contact], int]: Contacts on the page and the total
        number of matching contacts.
    """
    conditions = [models.Contact.user_id == user.id]
    if name:
        like_name = f"%{name}%"
        conditions.append(
            or_(
                models.Contact.first_name.ilike(like_name),
                models.Contact.last_name.ilike(like_name),
            )
        )
    if email:
        conditions.append(models.Contact.email.ilike(f"%{email}%"))
    if phone:
        conditions.append(models.Contact.phone.ilike(f"%{phone}%"))

    total = db.scalar(
        select(func.count()).select_from(models.Contact).where(*conditions)
    ) or 0
    offset = (page - 1) * size
    if offset >= total:
        return [], total

    stmt = (
        select(models.Contact)
        .where(*conditions)
        .order_by(models.Contact.id)
        .offset(offset)
        .limit(size)
    )
    return db.scalars(stmt).all(), total


def update_contact(db: Session, contact: models.Contact, changes: dict):
    """
    Update mutable fields of a contact.

    Args:
        db (Session): Database session.
        contact (Contact): Contact instance.
        changes (dict): Fields to update.

    Returns:
        Contact: Updated contact.
    """
    for key, value in changes.items():
        setattr(contact, key, value)

    db.add(contact)
    db.commit()
    db.refresh(contact)
    return contact


def delete_contact(db: Session, contact: models.Contact):
    """
    Delete a contact together with its addresses.

    Args:
        db (Session): Database session.
        contact (Contact): Contact to delete.
    """
    contact_id = contact.id
    db.delete(contact)
    db.commit()
    logger.info("Deleted contact %s", contact_id)
    return None


def create_address(
    db: Session, address_in: schemas.AddressCreate, contact: models.Contact
) -> models.Address:
    """
    Attach a new address to a contact.

    Args:
        db (Session): Database session.
        address_in (AddressCreate): Address data.
        contact (Contact): Owning contact.

    Returns:
        Address: Newly created address.
    """
    address = models.Address(**address_in.model_dump(), contact_id=contact.id)
    db.add(address)
    db.commit()
    db.refresh(address)
    logger.info("Contact %s got address %s", contact.id, address.id)
    return address


def get_address(db: Session, address_id: int, contact: models.Contact):
    """
    Retrieve a single address of the given contact.

    Args:
        db (Session): Database session.
        address_id (int): Address identifier.
        contact (Contact): Owning contact.

    Returns:
        Address | None: Address if found, otherwise ``None``.
    """
    return db.execute(
        select(models.Address).where(
            models.Address.id == address_id,
            models.Address.contact_id == contact.id,
        )
    ).scalar_one_or_none()


def list_addresses(db: Session, contact: models.Contact):
    """
    Return every address of the contact, oldest first.

    Args:
        db (Session): Database session.
        contact (Contact): Owning contact.

    Returns:
        list[Address]: Addresses of the contact.
    """
    return db.scalars(
        select(models.Address)
        .where(models.Address.contact_id == contact.id)
        .order_by(models.Address.id)
    ).all()


def update_address(db: Session, address: models.Address, changes: dict):
    """
    Update mutable fields of an address.

    Args:
        db (Session): Database session.
        address (Address): Address instance.
        changes (dict): Fields to update.

    Returns:
        Address: Updated address.
    """
    for key, value in changes.items():
        setattr(address, key, value)

    db.add(address)
    db.commit()
    db.refresh(address)
    return address


def delete_address(db: Session, address: models.Address):
    """
    Delete an address from the database.

    Args:
        db (Session): Database session.
        address (Address): Address to delete.
    """
    address_id = address.id
    db.delete(address)
    db.commit()
    logger.info("Deleted address %s", address_id)
    return None
