from pydantic import BaseModel, EmailStr
from typing import Optional
from bistro.models.user import Role

class UserBase(BaseModel):
    email: EmailStr

class UserCreate(UserBase):
    password: str
    full_name: Optional[str] = None

class UserOut(UserBase):
    id: int
    role: Role
    
    class Config:
        from_attributes = True

class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"

class IsAdminOut(BaseModel):
    is_admin: bool

class EmailLookup(BaseModel):
    user_id: int
