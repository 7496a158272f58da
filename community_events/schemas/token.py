# community_events/schemas/token.py
from pydantic import BaseModel
from typing import Optional


class TokenPayload(BaseModel):
    sub: str  # "sub" is the standard claim for subject (user ID)
    email: Optional[str] = None
    exp: int  # Standard claim for expiration time

    model_config = {"from_attributes": True}
