from pydantic import BaseModel
from typing import Optional


class ActorRead(BaseModel):
    id: int
    name: str
    slug: Optional[str] = None
    photo: str

    class Config:
        from_attributes = True
