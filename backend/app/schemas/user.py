from pydantic import BaseModel, Field, field_validator

from app.models.user import UserRole


class UserLogin(BaseModel):
    # Matric number for students, worker number for lecturers.
    login: str = Field(min_length=1, max_length=20)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("login")
    @classmethod
    def normalize_login(cls, value: str) -> str:
        return value.strip().upper()


class UserOut(BaseModel):
    id: str
    login: str
    name: str
    role: UserRole

    model_config = {"from_attributes": True}


class Token(BaseModel):
    access_token: str
    token_type: str
    user: UserOut
