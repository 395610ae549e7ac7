from datetime import date

import pytest
from fastapi import HTTPException

from app.models.revenue import MonthlyRevenueSummary, WeeklyRevenue
from app.services.revenue_service import (
    add_sale_revenue,
    book_sale,
    is_sale_event,
    monthly_overview,
    record_daily_entry,
    record_weekly_entry,
    update_targets,
)


TODAY = date(2026, 10, 18)


def test_sale_keywords_match_case_insensitively():
    assert is_sale_event("Sale")
    assert is_sale_event("Big SALE bonus")
    assert is_sale_event("Πώληση καταστήματος")
    assert not is_sale_event("Late arrival")
    assert not is_sale_event(None)


def test_weekly_entry_is_last_write_wins_and_normalised_to_monday(db, make_employee):
    employee = make_employee()

    record_weekly_entry(db, employee_id=employee.id, week_start_date=date(2026, 10, 14), amount_euros=100, today=TODAY)
    row = record_weekly_entry(db, employee_id=employee.id, week_start_date=date(2026, 10, 12), amount_euros=250, today=TODAY)
    db.commit()

    assert row.week_start_date == date(2026, 10, 12)
    assert row.revenue_amount == 25000


def test_sales_accumulate(db, make_employee):
    employee = make_employee()
    add_sale_revenue(db, employee.id, 1000, on=TODAY)
    row = add_sale_revenue(db, employee.id, 500, on=TODAY)
    assert row.revenue_amount == 1500


def test_summary_adds_weekly_and_daily_and_updates_actual(db, make_employee):
    employee = make_employee(monthly_revenue_target=1000)

    record_weekly_entry(db, employee_id=employee.id, week_start_date=date(2026, 10, 5), amount_euros=300, today=TODAY)
    record_daily_entry(db, employee_id=employee.id, day=date(2026, 10, 16), amount_euros=50.25, today=TODAY)
    # week starting in September does not count toward October
    record_weekly_entry(db, employee_id=employee.id, week_start_date=date(2026, 9, 28), amount_euros=999, today=TODAY)
    db.commit()

    summary = (
        db.query(MonthlyRevenueSummary)
        .filter(MonthlyRevenueSummary.employee_id == employee.id, MonthlyRevenueSummary.month == 10)
        .one()
    )
    assert summary.total_revenues == 35025
    assert summary.weeks_count == 1
    assert summary.days_count == 1
    db.refresh(employee)
    assert employee.monthly_revenue_actual == 35025


def test_manual_override_survives_revenue_entries(db, make_employee):
    employee = make_employee(monthly_revenue_target=1000)
    update_targets(db, employee, actual_euros=700, today=TODAY)
    db.commit()

    record_weekly_entry(db, employee_id=employee.id, week_start_date=date(2026, 10, 12), amount_euros=100, today=TODAY)
    db.commit()
    db.refresh(employee)
    assert employee.manual_revenue_override is True
    assert employee.monthly_revenue_actual == 70000

    update_targets(db, employee, clear_override=True, today=TODAY)
    db.commit()
    db.refresh(employee)
    assert employee.manual_revenue_override is False
    assert employee.monthly_revenue_actual == 10000


def test_negative_amounts_are_refused(db, make_employee):
    employee = make_employee()
    with pytest.raises(HTTPException) as exc:
        record_daily_entry(db, employee_id=employee.id, day=TODAY, amount_euros=-1)
    assert exc.value.status_code == 400


def test_bonus_type_is_validated(db, make_employee):
    employee = make_employee()
    with pytest.raises(HTTPException):
        update_targets(db, employee, bonus_type="GOLD")

    update_targets(db, employee, bonus_value=100)
    assert employee.bonus_revenue_type == "EUR"


def test_monthly_overview_caps_progress(db, make_employee):
    employee = make_employee(full_name="Anna", monthly_revenue_target=100)
    update_targets(db, employee, actual_euros=250, today=TODAY)
    db.commit()

    overview = monthly_overview(db, 2026, 10, today=TODAY)

    item = next(i for i in overview["items"] if i["employeeId"] == str(employee.id))
    assert item["progress"] == 100.0
    assert item["manualOverride"] is True


def test_monthly_overview_of_a_past_month_reads_its_summary(db, make_employee):
    employee = make_employee(monthly_revenue_target=1000)
    today = date(2026, 3, 15)

    record_weekly_entry(db, employee_id=employee.id, week_start_date=date(2026, 1, 12), amount_euros=100, today=today)
    record_weekly_entry(db, employee_id=employee.id, week_start_date=date(2026, 3, 9), amount_euros=999, today=today)
    db.commit()

    january = monthly_overview(db, 2026, 1, today=today)
    march = monthly_overview(db, 2026, 3, today=today)

    item = next(i for i in january["items"] if i["employeeId"] == str(employee.id))
    assert item["actual"] == 10000
    assert item["progress"] == 10.0
    assert item["manualOverride"] is False
    assert january["totalActual"] == 10000
    assert march["items"][0]["actual"] == 99900


def test_sale_in_a_week_that_began_last_month_counts_for_this_month(db, make_employee):
    employee = make_employee(monthly_revenue_target=1000)
    today = date(2026, 4, 1)

    book_sale(db, employee, 10000, today=today)
    db.commit()

    week = db.query(WeeklyRevenue).filter(WeeklyRevenue.employee_id == employee.id).one()
    assert week.week_start_date == date(2026, 3, 30)
    assert week.spillover_amount == 10000

    april = (
        db.query(MonthlyRevenueSummary)
        .filter(MonthlyRevenueSummary.employee_id == employee.id, MonthlyRevenueSummary.month == 4)
        .one()
    )
    assert april.total_revenues == 10000
    db.refresh(employee)
    assert employee.monthly_revenue_actual == 10000


def test_manual_week_entry_replaces_spillover(db, make_employee):
    employee = make_employee(monthly_revenue_target=1000)
    today = date(2026, 4, 1)

    book_sale(db, employee, 10000, today=today)
    record_weekly_entry(db, employee_id=employee.id, week_start_date=date(2026, 3, 30), amount_euros=300, today=today)
    db.commit()

    summaries = {
        s.month: s.total_revenues
        for s in db.query(MonthlyRevenueSummary).filter(MonthlyRevenueSummary.employee_id == employee.id).all()
    }
    assert summaries[3] == 30000
    assert summaries[4] == 0
    db.refresh(employee)
    assert employee.monthly_revenue_actual == 0
