from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, Dict, List, Optional


class CheckLostRequest(BaseModel):
    lost_item_id: int = Field(alias="lostItemId")

    class Config:
        populate_by_name = True


class CheckFoundRequest(BaseModel):
    found_item_id: int = Field(alias="foundItemId")

    class Config:
        populate_by_name = True


class MatchDecisionRequest(BaseModel):
    match_id: int = Field(alias="matchId")
    notes: Optional[str] = None

    class Config:
        populate_by_name = True


class MatchResponse(BaseModel):
    id: int
    lost_item_id: int
    found_item_id: int
    match_score: float
    match_details: Optional[Dict[str, Any]]
    status: str
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MatchCheckResponse(BaseModel):
    success: bool
    message: str
    matches: List[MatchResponse]


class MatchListResponse(BaseModel):
    success: bool
    count: int
    matches: List[MatchResponse]
