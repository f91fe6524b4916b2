from pydantic import BaseModel
from typing import Optional


class DocumentOut(BaseModel):
    name: str
    url: str
    size: Optional[int] = None
