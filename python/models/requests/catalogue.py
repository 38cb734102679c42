"""
Exercise and Method request models.
"""

from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field


def _clean_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("name must not be blank")
    return value


Name = Annotated[str, Field(max_length=255), AfterValidator(_clean_name)]


class ExerciseCreate(BaseModel):
    name: Name
    description: str = ""
    muscle_group: Optional[str] = Field(None, max_length=100)
    equipment: Optional[str] = Field(None, max_length=100)
    video_url: Optional[str] = Field(None, max_length=500)


class ExerciseUpdate(BaseModel):
    """Partial update; only fields that were sent are applied."""
    name: Optional[Name] = None
    description: Optional[str] = None
    muscle_group: Optional[str] = Field(None, max_length=100)
    equipment: Optional[str] = Field(None, max_length=100)
    video_url: Optional[str] = Field(None, max_length=500)


class MethodCreate(BaseModel):
    name: Name
    description: str = ""


class MethodUpdate(BaseModel):
    name: Optional[Name] = None
    description: Optional[str] = None
