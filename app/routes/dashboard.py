from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.actor import require_manager
from app.services.approval_service import list_pending
from app.services.progress_service import leaderboard, manager_dashboard


router = APIRouter(tags=["dashboard"])


@router.get("/leaderboard")
def get_leaderboard(limit: int = 10, db: Session = Depends(get_db)):
    limit = max(1, min(limit, 100))
    return {"items": leaderboard(db, limit=limit)}


@router.get("/manager/dashboard", dependencies=[Depends(require_manager)])
def get_manager_dashboard(db: Session = Depends(get_db)):
    return manager_dashboard(db)


@router.get("/approvals/pending", dependencies=[Depends(require_manager)])
def get_pending_approvals(db: Session = Depends(get_db)):
    return list_pending(db)
