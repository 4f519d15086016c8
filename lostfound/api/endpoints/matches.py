"""Match endpoints: on-demand checks, confirm/reject and listing"""
from fastapi import APIRouter, Depends
from lostfound.api.deps import get_current_user_id, get_match_manager
from lostfound.schemas import (
    CheckFoundRequest,
    CheckLostRequest,
    MatchCheckResponse,
    MatchDecisionRequest,
    MatchListResponse,
    MatchResponse,
)
from lostfound.services.match_manager import MatchLifecycleManager

router = APIRouter(prefix="/match")


@router.post("/check-lost", response_model=MatchCheckResponse)
def check_lost(request: CheckLostRequest, manager: MatchLifecycleManager = Depends(get_match_manager)):
    """Check a lost item against all active found items"""
    matches = manager.evaluate_lost_item(request.lost_item_id)
    return MatchCheckResponse(
        success=True,
        message=f"Found {len(matches)} potential match(es)",
        matches=[MatchResponse.model_validate(m) for m in matches],
    )


@router.post("/check-found", response_model=MatchCheckResponse)
def check_found(request: CheckFoundRequest, manager: MatchLifecycleManager = Depends(get_match_manager)):
    """Check a found item against all active lost items"""
    matches = manager.evaluate_found_item(request.found_item_id)
    return MatchCheckResponse(
        success=True,
        message=f"Found {len(matches)} potential match(es)",
        matches=[MatchResponse.model_validate(m) for m in matches],
    )


@router.post("/confirm", response_model=MatchResponse)
def confirm_match(
    request: MatchDecisionRequest,
    user_id: int = Depends(get_current_user_id),
    manager: MatchLifecycleManager = Depends(get_match_manager),
):
    return manager.confirm(request.match_id, user_id, request.notes)


@router.post("/reject", response_model=MatchResponse)
def reject_match(
    request: MatchDecisionRequest,
    user_id: int = Depends(get_current_user_id),
    manager: MatchLifecycleManager = Depends(get_match_manager),
):
    return manager.reject(request.match_id, user_id, request.notes)


@router.get("/list", response_model=MatchListResponse)
def list_matches(
    user_id: int = Depends(get_current_user_id),
    manager: MatchLifecycleManager = Depends(get_match_manager),
):
    """All matches involving the caller's items, best score first"""
    matches = manager.list_for_user(user_id)
    return MatchListResponse(
        success=True,
        count=len(matches),
        matches=[MatchResponse.model_validate(m) for m in matches],
    )
