from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class LoginCredentials(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    name: Optional[str] = None
    email: str
