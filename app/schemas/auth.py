from pydantic import EmailStr, Field
from typing import Optional

from app.schemas.base import CamelModel
from app.schemas.user import Goals, UserBrief

class UserLogin(CamelModel):
    email: str
    password: str

class UserRegister(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    age: Optional[int] = Field(None, gt=0)
    weight: Optional[float] = Field(None, gt=0)
    height: Optional[float] = Field(None, gt=0)
    goals: Optional[Goals] = None

class AuthResponse(CamelModel):
    success: bool = True
    user: UserBrief
    access_token: str
    token_type: str = "bearer"
