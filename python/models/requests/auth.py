"""
Authentication request models.
"""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, EmailStr, Field

from .catalogue import Name

Email = Annotated[EmailStr, AfterValidator(str.lower)]


class LoginRequest(BaseModel):
    email: Email
    password: str = Field(..., min_length=1)


class RegisterRequest(LoginRequest):
    name: Name
    password: str = Field(..., min_length=8)
