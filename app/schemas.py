"""Request and response schemas.

Each request model is the validation declaration of one operation:
which fields are required, their length bounds and formats. FastAPI
validates incoming bodies against them before any handler runs.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

T = TypeVar("T")


def _required(value):
    """Reject an explicit ``null`` for a field that cannot be cleared."""
    if value is None:
        raise PydanticCustomError("missing", "Field required")
    return value


EMAIL_MAX_LENGTH = 200


def _email_length(value: Optional[str]) -> Optional[str]:
    """Bound the stored email the same way the other string columns are."""
    if value is not None and len(value) > EMAIL_MAX_LENGTH:
        raise PydanticCustomError(
            "string_too_long",
            "String should have at most {max_length} characters",
            {"max_length": EMAIL_MAX_LENGTH},
        )
    return value


class UserRegister(BaseModel):
    """Payload for registering a new user."""

    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=1, max_length=100)


class UserLogin(BaseModel):
    """Credentials submitted to ``/users/login``."""

    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=100)


class UserUpdate(BaseModel):
    """Profile changes; fields left out or ``null`` are kept as they are."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    password: Optional[str] = Field(None, min_length=1, max_length=100)


class UserOut(BaseModel):
    """Public projection of a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    name: str


class UserWithToken(UserOut):
    """User returned by a successful login."""

    token: str


class ContactCreate(BaseModel):
    """Schema for creating a new contact."""

    first_name: str = Field(min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return _email_length(value)


class ContactUpdate(BaseModel):
    """Schema for updating a contact; only supplied fields change."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)

    @field_validator("first_name")
    @classmethod
    def check_first_name(cls, value):
        return _required(value)

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return _email_length(value)


class ContactOut(BaseModel):
    """Contact as returned to its owner."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class AddressCreate(BaseModel):
    """Schema for adding an address to a contact."""

    street: Optional[str] = Field(None, max_length=200)
    city: Optional[str] = Field(None, max_length=200)
    province: Optional[str] = Field(None, max_length=200)
    country: str = Field(min_length=1, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=10)


class AddressUpdate(BaseModel):
    """Schema for updating an address; only supplied fields change."""

    street: Optional[str] = Field(None, max_length=200)
    city: Optional[str] = Field(None, max_length=200)
    province: Optional[str] = Field(None, max_length=200)
    country: Optional[str] = Field(None, min_length=1, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=10)

    @field_validator("country")
    @classmethod
    def check_country(cls, value):
        return _required(value)


class AddressOut(BaseModel):
    """Address as returned to the owner of its contact."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    street: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    country: str
    postal_code: Optional[str] = None


class DataResponse(BaseModel, Generic[T]):
    """Success envelope wrapping a single payload."""

    data: T


class PageMeta(BaseModel):
    """Pagination details of a search result."""

    total: int
    current_page: int
    size: int
    last_page: int


class ContactPage(BaseModel):
    """One page of contact search results."""

    data: List[ContactOut]
    meta: PageMeta
