from datetime import date, datetime, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session

from app import settings
from app.models.employee import Employee
from app.models.employee_event import EmployeeEvent
from app.models.employee_request import EmployeeRequest
from app.models.reward_redemption import RewardRedemption
from app.services.calendar_service import month_bounds, today as utc_today


def percentage(value, total) -> float:
    total = float(total or 0)
    if total <= 0:
        return 0.0
    return float(value or 0) / total * 100


def points_progress(points_balance: int, monthly_target_points: int | None = None) -> float:
    target = settings.MONTHLY_TARGET_POINTS if monthly_target_points is None else monthly_target_points
    return percentage(points_balance, target)


def sales_progress(actual_cents: int, target_cents: int) -> float:
    return percentage(actual_cents, target_cents)


def points_in_euros(points_balance: int) -> float:
    if settings.POINTS_PER_EURO <= 0:
        return 0.0
    return round((points_balance or 0) / settings.POINTS_PER_EURO, 2)


def _active_ranking(db: Session):
    return (
        db.query(Employee)
        .filter(Employee.is_active.is_(True))
        .order_by(Employee.points_balance.desc(), Employee.full_name.asc())
    )


def rank_of(db: Session, employee: Employee) -> int | None:
    if not employee.is_active:
        return None
    for position, (employee_id,) in enumerate(_active_ranking(db).with_entities(Employee.id), start=1):
        if employee_id == employee.id:
            return position
    return None


def leaderboard(db: Session, limit: int = 10) -> list[dict]:
    rows = _active_ranking(db).limit(limit).all()
    return [
        {
            "rank": position,
            "employeeId": str(e.id),
            "fullName": e.full_name,
            "pointsBalance": e.points_balance,
            "storeId": str(e.store_id) if e.store_id else None,
        }
        for position, e in enumerate(rows, start=1)
    ]


def daily_points(db: Session, employee_id, *, days: int = 7, today: date | None = None) -> list[dict]:
    current = today or utc_today()
    first_day = current - timedelta(days=days - 1)

    rows = (
        db.query(EmployeeEvent.created_at, EmployeeEvent.points)
        .filter(
            EmployeeEvent.employee_id == employee_id,
            EmployeeEvent.created_at >= datetime.combine(first_day, datetime.min.time()),
        )
        .all()
    )

    totals = {first_day + timedelta(days=i): 0 for i in range(days)}
    for created_at, points in rows:
        if created_at is None:
            continue
        day = created_at.date()
        if day in totals:
            totals[day] += points

    return [{"date": day.isoformat(), "points": points} for day, points in totals.items()]


def employee_dashboard(db: Session, employee: Employee, *, today: date | None = None) -> dict:
    target = int(employee.monthly_revenue_target or 0)
    actual = int(employee.monthly_revenue_actual or 0)

    recent = (
        db.query(EmployeeEvent)
        .filter(EmployeeEvent.employee_id == employee.id)
        .order_by(EmployeeEvent.created_at.desc())
        .limit(10)
        .all()
    )

    return {
        "employeeId": str(employee.id),
        "fullName": employee.full_name,
        "pointsBalance": employee.points_balance,
        "totalEarnedPoints": employee.total_earned_points,
        "monthlyTargetPoints": settings.MONTHLY_TARGET_POINTS,
        "progressPercentage": points_progress(employee.points_balance),
        "pointsInEuros": points_in_euros(employee.points_balance),
        "monthlyRevenueTarget": target,
        "monthlyRevenueActual": actual,
        "salesProgressPercentage": sales_progress(actual, target),
        "revenueRemaining": max(target - actual, 0),
        "rank": rank_of(db, employee),
        "recentEvents": [
            {
                "id": str(e.id),
                "eventType": e.event_type,
                "points": e.points,
                "transactionType": e.transaction_type,
                "description": e.description,
                "createdAt": e.created_at,
            }
            for e in recent
        ],
        "dailyPoints": daily_points(db, employee.id, today=today),
    }


def manager_dashboard(db: Session) -> dict:
    active = db.query(Employee).filter(Employee.is_active.is_(True))
    total_target, total_actual, total_points = active.with_entities(
        func.coalesce(func.sum(Employee.monthly_revenue_target), 0),
        func.coalesce(func.sum(Employee.monthly_revenue_actual), 0),
        func.coalesce(func.sum(Employee.points_balance), 0),
    ).one()

    return {
        "activeEmployees": active.count(),
        "pendingRequests": db.query(EmployeeRequest).filter(EmployeeRequest.status == "pending").count(),
        "pendingRedemptions": db.query(RewardRedemption).filter(RewardRedemption.status == "pending").count(),
        "totalPoints": int(total_points or 0),
        "totalRevenueTarget": int(total_target or 0),
        "totalRevenueActual": int(total_actual or 0),
        "salesProgressPercentage": sales_progress(total_actual, total_target),
    }


# ============================================================
# EXTRA PENALTY (advisory, nothing is deducted)
# ============================================================
def penalty_status(db: Session, employee: Employee, *, today: date | None = None) -> dict:
    current = today or utc_today()
    start, end = month_bounds(current.year, current.month)

    negative_count = (
        db.query(EmployeeEvent)
        .filter(
            EmployeeEvent.employee_id == employee.id,
            EmployeeEvent.transaction_type == "EVENT",
            EmployeeEvent.points < 0,
            EmployeeEvent.created_at >= datetime.combine(start, datetime.min.time()),
            EmployeeEvent.created_at < datetime.combine(end, datetime.min.time()),
        )
        .count()
    )

    limit = settings.EXTRA_PENALTY_LIMIT
    triggered = limit > 0 and negative_count >= limit

    return {
        "employeeId": str(employee.id),
        "year": current.year,
        "month": current.month,
        "negativeEvents": negative_count,
        "limit": limit,
        "triggered": triggered,
        "penaltyEuros": settings.EXTRA_PENALTY_EUROS if triggered else 0,
    }
