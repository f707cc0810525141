from pydantic import BaseModel


class CreatedResponse(BaseModel):
    id: str


class DeletedResponse(BaseModel):
    deleted: int


class UpdatedResponse(BaseModel):
    updated: int
