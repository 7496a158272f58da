from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class PhotoCreate(BaseModel):
    event_id: str
    image: str = Field(..., min_length=1, description="Storage path or URL of the uploaded image")
    public_url: Optional[str] = Field(
        None, description="Defaults to `image` when it is already a URL"
    )
    caption: Optional[str] = Field(None, max_length=500)


class Photo(BaseModel):
    id: str
    event_id: str
    image: str
    public_url: str
    caption: Optional[str] = None
    uploaded_by_user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
