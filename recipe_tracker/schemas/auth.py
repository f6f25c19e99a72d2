from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# Length rules are enforced by the credential store so the UI gets its exact messages.


class UserRegister(BaseModel):
    username: str = Field(max_length=40)
    password: str = Field(max_length=128)


class UserLogin(BaseModel):
    username: str = Field(max_length=40)
    password: str = Field(max_length=128)


class UserRead(BaseModel):
    id: int
    username: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
