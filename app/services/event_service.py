import logging
from datetime import date

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.employee import Employee
from app.models.employee_request import EmployeeRequest
from app.models.event_definition import EventDefinition
from app.services.calendar_service import euros_to_cents
from app.services.points_service import lock_employee, post_points, signed_points
from app.services.revenue_service import book_sale, is_sale_event
from app.services.status_service import APPROVED, PENDING


logger = logging.getLogger(__name__)


def _load_definitions(db: Session, event_type_ids) -> list[EventDefinition]:
    ids = list(dict.fromkeys(event_type_ids or []))
    if not ids:
        raise HTTPException(status_code=400, detail="Select at least one event")

    rows = db.query(EventDefinition).filter(EventDefinition.id.in_(ids)).all()
    by_id = {r.id: r for r in rows}

    definitions = []
    for event_type_id in ids:
        definition = by_id.get(event_type_id)
        if not definition:
            raise HTTPException(status_code=404, detail="Event type not found")
        if not definition.is_enabled:
            raise HTTPException(status_code=400, detail=f"Event type '{definition.name}' is disabled")
        definitions.append(definition)
    return definitions


# ============================================================
# EVENT SUBMISSION (manager records events directly)
# ============================================================
def submit_events(
    db: Session,
    *,
    employee_id,
    event_type_ids,
    comment: str | None = None,
    sale_amount=None,
    created_by: str = "manager",
    today: date | None = None,
):
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee or not employee.is_active:
        raise HTTPException(status_code=404, detail="Employee not found")

    definitions = _load_definitions(db, event_type_ids)
    comment = (comment or "").strip() or None

    sale_cents = euros_to_cents(sale_amount) if sale_amount else 0
    if sale_cents < 0:
        raise HTTPException(status_code=400, detail="Sale amount must not be negative")

    try:
        employee = lock_employee(db, employee.id)

        events = []
        for definition in definitions:
            events.append(
                post_points(
                    db,
                    employee,
                    points=signed_points(definition.points, definition.event_type),
                    event_type=definition.name,
                    event_type_id=definition.id,
                    transaction_type="EVENT",
                    description=comment or f"Event recorded: {definition.name}",
                    notes=comment,
                    created_by=created_by,
                )
            )

        sale_definition = next((d for d in definitions if is_sale_event(d.name)), None)
        sale_request = None
        if sale_definition and sale_cents > 0:
            # audit row for the sale; revenue goes through the same path as approvals
            sale_request = EmployeeRequest(
                employee_id=employee.id,
                request_type=sale_definition.event_type,
                event_type=sale_definition.name,
                description=f"Sale amount: €{sale_cents / 100:.2f}",
                points=signed_points(sale_definition.points, sale_definition.event_type),
                amount=sale_cents,
                status=APPROVED,
                approved_by=created_by,
            )
            db.add(sale_request)
            book_sale(db, employee, sale_cents, today=today)

        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("failed to record events for employee %s", employee_id)
        raise HTTPException(status_code=500, detail="Could not record events")

    for e in events:
        db.refresh(e)

    total = sum(e.points for e in events)
    logger.info("recorded %s events (%+d points) for employee %s", len(events), total, employee.id)

    return {
        "employee_id": employee.id,
        "total_points": total,
        "events": events,
        "sale_request_id": sale_request.id if sale_request else None,
    }


# ============================================================
# EMPLOYEE SELF-SERVICE REQUEST
# ============================================================
def create_employee_request(
    db: Session,
    employee: Employee,
    *,
    event_type_id,
    description: str | None = None,
    amount=None,
) -> EmployeeRequest:
    definition = _load_definitions(db, [event_type_id])[0]

    amount_cents = None
    if amount:
        amount_cents = euros_to_cents(amount)
        if amount_cents < 0:
            raise HTTPException(status_code=400, detail="Amount must not be negative")

    request = EmployeeRequest(
        employee_id=employee.id,
        request_type=definition.event_type,
        event_type=definition.name,
        description=(description or "").strip() or None,
        points=signed_points(definition.points, definition.event_type),
        amount=amount_cents,
        status=PENDING,
    )
    db.add(request)
    db.commit()
    db.refresh(request)
    return request
