from pydantic import BaseModel, Field

from colors_api.core.constants import NAME_MAX_LENGTH, PASSWORD_MIN_LENGTH, USERNAME_MAX_LENGTH


class Identity(BaseModel):
    """Decoded token claims identifying the caller"""

    username: str
    is_admin: bool


class TokenRequest(BaseModel):
    """Schema for exchanging credentials for a token"""

    username: str = Field(min_length=1, max_length=USERNAME_MAX_LENGTH)
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    """Schema for self-registration; never grants admin"""

    username: str = Field(min_length=1, max_length=USERNAME_MAX_LENGTH)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)
    first_name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)


class Token(BaseModel):
    """Schema for JWT token response"""

    token: str
