import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    prompt: Optional[str] = None
    style: str
    aspect_ratio: str
    color_scheme: Optional[str] = None
    text_overlay: bool


class ThumbnailOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: str
    title: str
    user_prompt: Optional[str] = None
    prompt_used: Optional[str] = None
    style: str
    color_scheme: Optional[str] = None
    aspect_ratio: str
    text_overlay: bool
    is_generating: bool
    image_url: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime
