"""Item reporting endpoint; stores the item and queues match evaluation"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from lostfound.api.deps import get_current_user_id
from lostfound.database import get_db
from lostfound.schemas import ItemCreate, ItemResponse
from lostfound.services.stores import ItemStore
from lostfound.tasks.celery_tasks import schedule_match_evaluation

router = APIRouter()


@router.post("/items", response_model=ItemResponse, status_code=201)
def report_item(
    request: ItemCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Report a lost or found item
    Match evaluation runs in the background; queueing problems never fail the report
    """
    item = ItemStore(db).create_item(user_id, **request.model_dump())
    schedule_match_evaluation(item.id, item.status)
    return item


@router.get("/items/{item_id}", response_model=ItemResponse)
def get_item(item_id: int, db: Session = Depends(get_db)):
    return ItemStore(db).get_item(item_id)
