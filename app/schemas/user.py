from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from app.utils.validation_helpers import validate_not_blank


class UserRegister(BaseModel):
    fullname: str
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("fullname")
    @classmethod
    def check_fullname(cls, value):
        return validate_not_blank(value)


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserResponse(BaseModel):
    id: int
    fullname: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    message: str
    user: UserResponse
    access_token: str
    token_type: str = "bearer"
