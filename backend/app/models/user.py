# user models: stored user record and public response
# no auth in this app, password is stored opaque and never returned

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    password: str


class User(BaseModel):
    id: int
    username: str
    password: str


class UserResponse(BaseModel):
    id: int
    username: str
