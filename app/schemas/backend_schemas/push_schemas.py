from pydantic import BaseModel
from typing import Optional


class PushTestResponse(BaseModel):
    message: str
    id: Optional[str] = None
    recipients: Optional[int] = None
