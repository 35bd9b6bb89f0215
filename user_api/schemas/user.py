from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from user_api.models.user import User

# Range of the users.id INTEGER column
USER_ID_MIN = -(2**31)
USER_ID_MAX = 2**31 - 1


class UserPayload(BaseModel):
    """
    Request body for create and update.

    Every field is optional at the parsing layer so that missing values are
    reported by validate_user() alongside length and format problems, in one
    response, instead of failing JSON parsing field by field.
    """
    id: Optional[int] = Field(None, ge=USER_ID_MIN, le=USER_ID_MAX)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    user_name: Optional[str] = None
    password: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def column_values(self) -> dict:
        """Values for every editable column, keyed by attribute name"""
        return {field: getattr(self, field) for field in User.EDITABLE_FIELDS}


class UserResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    street_address: str
    city: Optional[str] = None
    state: Optional[str] = None
    user_name: str
    password: str

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )
