from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.actor import require_manager
from app.models.revenue import WeeklyRevenue
from app.schemas.revenue import DailyRevenueIn, DailyRevenueOut, WeeklyRevenueIn, WeeklyRevenueOut
from app.services.calendar_service import today, week_start
from app.services.revenue_service import monthly_overview, record_daily_entry, record_weekly_entry


router = APIRouter(prefix="/revenue", tags=["revenue"], dependencies=[Depends(require_manager)])


@router.put("/weekly", response_model=WeeklyRevenueOut)
def put_weekly(payload: WeeklyRevenueIn, db: Session = Depends(get_db)):
    row = record_weekly_entry(
        db,
        employee_id=payload.employee_id,
        week_start_date=payload.week_start_date,
        amount_euros=payload.amount,
    )
    db.commit()
    db.refresh(row)
    return row


@router.put("/daily", response_model=DailyRevenueOut)
def put_daily(payload: DailyRevenueIn, db: Session = Depends(get_db)):
    row = record_daily_entry(
        db,
        employee_id=payload.employee_id,
        day=payload.date,
        amount_euros=payload.amount,
        notes=payload.notes,
    )
    db.commit()
    db.refresh(row)
    return row


@router.get("/weekly", response_model=list[WeeklyRevenueOut])
def list_weekly(
    employee_id: UUID | None = None,
    since: date | None = None,
    limit: int = 50,
    db: Session = Depends(get_db),
):
    q = db.query(WeeklyRevenue)
    if employee_id:
        q = q.filter(WeeklyRevenue.employee_id == employee_id)
    if since:
        q = q.filter(WeeklyRevenue.week_start_date >= week_start(since))

    limit = max(1, min(limit, 200))
    return q.order_by(WeeklyRevenue.week_start_date.desc()).limit(limit).all()


@router.get("/monthly")
def get_monthly(year: int | None = None, month: int | None = None, db: Session = Depends(get_db)):
    current = today()
    return monthly_overview(db, year or current.year, month or current.month)


@router.get("/week-start")
def get_week_start(date: date):
    return {"date": date.isoformat(), "weekStart": week_start(date).isoformat()}
