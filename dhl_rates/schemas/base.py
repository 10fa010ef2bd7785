"""
Base schemas with common functionality.
"""
from pydantic import BaseModel, ConfigDict, field_validator
from typing import Any, Optional, Type, TypeVar

T = TypeVar('T', bound='BaseSchema')


def blank_to_none(value: Any) -> Any:
    """Treat empty or whitespace-only strings as unset"""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class BaseSchema(BaseModel):
    """Base schema for the quote pipeline: immutable, buildable from ORM-style objects"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        frozen=True,
    )

    @classmethod
    def from_orm_model(cls: Type[T], orm_model: Any) -> T:
        """Create a schema instance from an ORM model or any attribute-bearing object"""
        return cls.model_validate(orm_model)


class AddressSchema(BaseSchema):
    """Country/postal/city triple shared by destination and stock location addresses"""
    country_iso: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None

    normalize_blanks = field_validator(
        'country_iso', 'postal_code', 'city', mode='before'
    )(blank_to_none)
