from pydantic import BaseModel, Field, model_validator
from datetime import date, datetime
from typing import Literal, Optional


class ItemCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    category: str = Field(min_length=1, max_length=50)  # electronics, documents, keys, bags, ...
    status: Literal["lost", "found"]
    location_lost: Optional[str] = None
    location_found: Optional[str] = None
    location_details: Optional[str] = None
    date_lost: Optional[date] = None
    date_found: Optional[date] = None
    color: Optional[str] = None
    brand: Optional[str] = None

    @model_validator(mode="after")
    def check_location_matches_status(self):
        # A lost report carries only where it was lost, a found report only where it was found
        if self.status == "lost":
            if self.location_found:
                raise ValueError("lost items take location_lost, not location_found")
            if not (self.location_lost or "").strip():
                raise ValueError("location_lost is required for lost items")
        if self.status == "found":
            if self.location_lost:
                raise ValueError("found items take location_found, not location_lost")
            if not (self.location_found or "").strip():
                raise ValueError("location_found is required for found items")
        return self


class ItemResponse(BaseModel):
    id: int
    user_id: int
    title: str
    description: str
    category: str
    status: str
    item_status: str
    location_lost: Optional[str]
    location_found: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
