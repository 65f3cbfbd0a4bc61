from datetime import datetime
from pydantic import BaseModel, ConfigDict

class UserBase(BaseModel):
    name: str
    email: str

class UserCreate(UserBase):
    password: str

class User(UserBase):
    """User as shown on pages, without the password hash"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
