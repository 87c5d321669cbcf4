"""
Identity Models

An Identity is the signed-in subject of a session. Authentication is
mocked: there is no account store, so an Identity is created directly
from what the user typed on the sign-in or sign-up form.
"""

import hashlib
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    """Role of a signed-in identity."""
    USER = "user"
    ADMIN = "admin"


class Identity(BaseModel):
    """The current session subject."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Identity id, also the storage scope of its transactions"
    )
    email: str = Field(..., min_length=1)
    role: Role = Field(
        default=Role.USER,
        description="Role granted at sign-in"
    )
    whatsapp_number: Optional[str] = Field(
        default=None,
        description="Number for WhatsApp reminders, if the user gave one"
    )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def identity_id_for_email(email: str) -> str:
    """
    Derive a stable identity id from an email address.

    The same email always maps to the same id, so a returning user
    finds the transactions stored under their scope.
    """
    digest = hashlib.sha256(email.strip().lower().encode("utf-8")).hexdigest()
    return f"user_{digest[:16]}"
