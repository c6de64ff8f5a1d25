from pydantic import BaseModel, EmailStr, Field

from schemas.user import UserResponse


class TokenPayload(BaseModel):
    """JWT token payload schema"""
    sub: str = Field(..., description="User ID (subject)")
    email: str
    role: str
    exp: int = Field(..., description="Token expiration timestamp")

    class Config:
        json_schema_extra = {
            "example": {
                "sub": "user_123",
                "email": "admin@hostel.com",
                "role": "Admin",
                "exp": 1234567890,
            }
        }


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """Access token plus the profile it was issued for"""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
