import logging
from datetime import date, timedelta

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from app import settings
from app.models.employee import Employee
from app.models.revenue import DailyRevenue, MonthlyRevenueSummary, WeeklyRevenue
from app.services.calendar_service import euros_to_cents, month_bounds, today as utc_today, week_start
from app.services.progress_service import percentage


logger = logging.getLogger(__name__)

BONUS_TYPES = {"EUR", "POINTS"}


def is_sale_event(name: str | None) -> bool:
    lowered = (name or "").lower()
    return any(keyword in lowered for keyword in settings.SALE_KEYWORDS)


def _get_employee(db: Session, employee_id) -> Employee:
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return employee


# ============================================================
# WEEKLY / DAILY ENTRIES
# ============================================================
def upsert_weekly_revenue(db: Session, employee_id, week_start_date: date, amount_cents: int) -> WeeklyRevenue:
    """Set the revenue of one week, last write wins."""
    monday = week_start(week_start_date)

    row = (
        db.query(WeeklyRevenue)
        .filter(WeeklyRevenue.employee_id == employee_id, WeeklyRevenue.week_start_date == monday)
        .first()
    )
    if row:
        row.revenue_amount = int(amount_cents)
    else:
        row = WeeklyRevenue(employee_id=employee_id, week_start_date=monday, revenue_amount=int(amount_cents))
        db.add(row)
    # a manual entry covers the whole week and belongs to the month it starts in
    row.spillover_amount = 0

    db.flush()
    return row


def add_sale_revenue(db: Session, employee_id, amount_cents: int, *, on: date | None = None) -> WeeklyRevenue:
    """
    Book an approved sale into the week containing ``on``.

    When the week began in the previous month, the amount is also tracked as
    spillover so the month of ``on`` still counts it.
    """
    day = on or utc_today()
    monday = week_start(day)
    amount_cents = int(amount_cents)

    row = (
        db.query(WeeklyRevenue)
        .filter(WeeklyRevenue.employee_id == employee_id, WeeklyRevenue.week_start_date == monday)
        .with_for_update()
        .first()
    )
    if not row:
        row = WeeklyRevenue(employee_id=employee_id, week_start_date=monday, revenue_amount=0, spillover_amount=0)
        db.add(row)

    row.revenue_amount = (row.revenue_amount or 0) + amount_cents
    if (day.year, day.month) != (monday.year, monday.month):
        row.spillover_amount = (row.spillover_amount or 0) + amount_cents

    db.flush()
    return row


def book_sale(db: Session, employee: Employee, amount_cents: int, *, today: date | None = None) -> WeeklyRevenue:
    """Sale revenue plus the summary refresh of the month the sale was booked in."""
    day = today or utc_today()
    week = add_sale_revenue(db, employee.id, amount_cents, on=day)
    refresh_monthly_summary(db, employee, day.year, day.month, today=day)
    return week


def upsert_daily_revenue(db: Session, employee_id, day: date, amount_cents: int, notes: str | None = None) -> DailyRevenue:
    row = (
        db.query(DailyRevenue)
        .filter(DailyRevenue.employee_id == employee_id, DailyRevenue.date == day)
        .first()
    )
    if row:
        row.revenue_amount = int(amount_cents)
        row.notes = notes
    else:
        row = DailyRevenue(employee_id=employee_id, date=day, revenue_amount=int(amount_cents), notes=notes)
        db.add(row)

    db.flush()
    return row


# ============================================================
# MONTHLY SUMMARY
# ============================================================
def refresh_monthly_summary(db: Session, employee: Employee, year: int, month: int, *, today: date | None = None) -> MonthlyRevenueSummary:
    """
    Rebuild the derived month aggregate from weekly and daily entries.

    For the current month the total also becomes the employee's
    monthly_revenue_actual, unless a manager pinned it manually.
    """
    start, end = month_bounds(year, month)
    previous_start = (start - timedelta(days=1)).replace(day=1)

    weekly_total, weeks_count = (
        db.query(
            func.coalesce(func.sum(WeeklyRevenue.revenue_amount - WeeklyRevenue.spillover_amount), 0),
            func.count(WeeklyRevenue.id),
        )
        .filter(
            WeeklyRevenue.employee_id == employee.id,
            WeeklyRevenue.week_start_date >= start,
            WeeklyRevenue.week_start_date < end,
        )
        .one()
    )
    # sales booked this month into a week that began last month
    spillover_total, spillover_weeks = (
        db.query(func.coalesce(func.sum(WeeklyRevenue.spillover_amount), 0), func.count(WeeklyRevenue.id))
        .filter(
            WeeklyRevenue.employee_id == employee.id,
            WeeklyRevenue.week_start_date >= previous_start,
            WeeklyRevenue.week_start_date < start,
            WeeklyRevenue.spillover_amount > 0,
        )
        .one()
    )
    daily_total, days_count = (
        db.query(func.coalesce(func.sum(DailyRevenue.revenue_amount), 0), func.count(DailyRevenue.id))
        .filter(
            DailyRevenue.employee_id == employee.id,
            DailyRevenue.date >= start,
            DailyRevenue.date < end,
        )
        .one()
    )

    summary = (
        db.query(MonthlyRevenueSummary)
        .filter(
            MonthlyRevenueSummary.employee_id == employee.id,
            MonthlyRevenueSummary.year == year,
            MonthlyRevenueSummary.month == month,
        )
        .first()
    )
    if not summary:
        summary = MonthlyRevenueSummary(employee_id=employee.id, year=year, month=month)
        db.add(summary)

    summary.total_revenues = int(weekly_total or 0) + int(spillover_total or 0) + int(daily_total or 0)
    summary.weeks_count = int(weeks_count or 0) + int(spillover_weeks or 0)
    summary.days_count = int(days_count or 0)

    current = today or utc_today()
    if (current.year, current.month) == (year, month) and not employee.manual_revenue_override:
        employee.monthly_revenue_actual = summary.total_revenues

    db.flush()
    return summary


def record_weekly_entry(db: Session, *, employee_id, week_start_date: date, amount_euros, today: date | None = None) -> WeeklyRevenue:
    employee = _get_employee(db, employee_id)
    if float(amount_euros) < 0:
        raise HTTPException(status_code=400, detail="Revenue amount must not be negative")

    row = upsert_weekly_revenue(db, employee.id, week_start_date, euros_to_cents(amount_euros))
    monday = row.week_start_date
    refresh_monthly_summary(db, employee, monday.year, monday.month, today=today)

    # the overwrite also drops any spillover the following month was counting
    sunday = monday + timedelta(days=6)
    if sunday.month != monday.month:
        refresh_monthly_summary(db, employee, sunday.year, sunday.month, today=today)
    return row


def record_daily_entry(db: Session, *, employee_id, day: date, amount_euros, notes: str | None = None, today: date | None = None) -> DailyRevenue:
    employee = _get_employee(db, employee_id)
    if float(amount_euros) < 0:
        raise HTTPException(status_code=400, detail="Revenue amount must not be negative")

    row = upsert_daily_revenue(db, employee.id, day, euros_to_cents(amount_euros), notes)
    refresh_monthly_summary(db, employee, day.year, day.month, today=today)
    return row


# ============================================================
# TARGETS
# ============================================================
def update_targets(
    db: Session,
    employee: Employee,
    *,
    monthly_target_euros=None,
    actual_euros=None,
    clear_override: bool = False,
    bonus_value: int | None = None,
    bonus_type: str | None = None,
    today: date | None = None,
) -> Employee:
    if monthly_target_euros is not None:
        if float(monthly_target_euros) < 0:
            raise HTTPException(status_code=400, detail="Target must not be negative")
        employee.monthly_revenue_target = euros_to_cents(monthly_target_euros)

    if actual_euros is not None:
        if float(actual_euros) < 0:
            raise HTTPException(status_code=400, detail="Revenue amount must not be negative")
        employee.monthly_revenue_actual = euros_to_cents(actual_euros)
        # keep the summary refresh from overwriting it
        employee.manual_revenue_override = True
    elif clear_override:
        employee.manual_revenue_override = False
        current = today or utc_today()
        refresh_monthly_summary(db, employee, current.year, current.month, today=current)

    if bonus_type is not None:
        if bonus_type not in BONUS_TYPES:
            raise HTTPException(status_code=400, detail="bonus type must be EUR or POINTS")
        employee.bonus_revenue_type = bonus_type
    if bonus_value is not None:
        if bonus_value < 0:
            raise HTTPException(status_code=400, detail="Bonus value must not be negative")
        employee.bonus_revenue_value = bonus_value
        if not employee.bonus_revenue_type:
            employee.bonus_revenue_type = "EUR"

    db.flush()
    return employee


def monthly_overview(db: Session, year: int, month: int, *, today: date | None = None) -> dict:
    """
    Per-employee target vs actual for one month. Only the current month reads
    the employee's live figure (which a manager may have pinned); other months
    come from their summary.
    """
    current = today or utc_today()
    is_current = (current.year, current.month) == (year, month)

    employees = (
        db.query(Employee)
        .filter(Employee.is_active.is_(True))
        .order_by(Employee.full_name.asc())
        .all()
    )
    summaries = {
        s.employee_id: s
        for s in (
            db.query(MonthlyRevenueSummary)
            .filter(MonthlyRevenueSummary.year == year, MonthlyRevenueSummary.month == month)
            .all()
        )
    }

    items = []
    for e in employees:
        summary = summaries.get(e.id)
        target = e.monthly_revenue_target or 0
        if is_current:
            actual = e.monthly_revenue_actual or 0
        else:
            actual = summary.total_revenues if summary else 0
        items.append(
            {
                "employeeId": str(e.id),
                "fullName": e.full_name,
                "position": e.position,
                "target": target,
                "actual": actual,
                "progress": min(percentage(actual, target), 100.0),
                "manualOverride": bool(e.manual_revenue_override) and is_current,
                "bonusValue": e.bonus_revenue_value,
                "bonusType": e.bonus_revenue_type,
                "summaryTotal": summary.total_revenues if summary else None,
                "weeksCount": summary.weeks_count if summary else 0,
                "daysCount": summary.days_count if summary else 0,
            }
        )

    total_target = sum(i["target"] for i in items)
    total_actual = sum(i["actual"] for i in items)

    return {
        "year": year,
        "month": month,
        "totalTarget": total_target,
        "totalActual": total_actual,
        "totalProgress": percentage(total_actual, total_target),
        "items": items,
    }
