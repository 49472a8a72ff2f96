from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from catalog.modules.users.models import MaritalStatus


class CreatorProfileIn(BaseModel):
    marital_status: Optional[MaritalStatus] = None
    occupation: Optional[str] = Field(default=None, max_length=120)
    religion: Optional[str] = Field(default=None, max_length=80)
    total_years_experience: Optional[float] = Field(default=None, ge=0, le=999.9)


class CreatorProfileRead(CreatorProfileIn):
    id: int
    user_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserFields(BaseModel):
    dob: Optional[str] = Field(default=None, max_length=122)
    country_code: Optional[str] = Field(default=None, max_length=10)
    country: Optional[str] = Field(default=None, max_length=122)
    state: Optional[str] = Field(default=None, max_length=122)
    district: Optional[str] = Field(default=None, max_length=122)
    town: Optional[str] = Field(default=None, max_length=122)
    profile_image: Optional[str] = None


class UserCreate(UserFields):
    id: str = Field(min_length=1, max_length=122)
    name: str = Field(min_length=1, max_length=15)
    phone: int = Field(ge=0)
    creator: Optional[CreatorProfileIn] = None


class UserUpdate(UserFields):
    name: Optional[str] = Field(default=None, min_length=1, max_length=15)
    phone: Optional[int] = Field(default=None, ge=0)
    creator: Optional[CreatorProfileIn] = None


class UserRead(UserFields):
    id: str
    name: str
    phone: int
    creator_profile: Optional[CreatorProfileRead] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
