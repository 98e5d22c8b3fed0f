from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from boilerplate.domain.role import Role


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role


class UserRegister(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1)
    password_confirm: str
    role: Role = Role.guest

    @model_validator(mode="after")
    def passwords_match(self) -> "UserRegister":
        if self.password != self.password_confirm:
            raise ValueError("Confirm password doesn't match")
        return self


class UserUpdate(BaseModel):
    """Full replacement of a user's details.

    ``password`` is optional: None keeps the stored hash, any other value is
    treated as a new plaintext password and hashed.
    """

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    role: Role
    password: str | None = None


class ProfileUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr


class PasswordChange(BaseModel):
    old_password: str
    password: str = Field(..., min_length=1)
    password_confirm: str

    @model_validator(mode="after")
    def passwords_match(self) -> "PasswordChange":
        if self.password != self.password_confirm:
            raise ValueError("Confirm password doesn't match")
        return self


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    email: EmailStr
    token: str
    password: str = Field(..., min_length=1)
    password_confirm: str

    @model_validator(mode="after")
    def passwords_match(self) -> "ResetPasswordRequest":
        if self.password != self.password_confirm:
            raise ValueError("Confirm password doesn't match")
        return self


class EmailAvailability(BaseModel):
    email: str
    available: bool


class Message(BaseModel):
    message: str
