import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app import settings
from app.db import engine, Base

from app.models.store import Store
from app.models.employee import Employee
from app.models.event_definition import EventDefinition
from app.models.employee_event import EmployeeEvent
from app.models.employee_request import EmployeeRequest
from app.models.reward import Reward
from app.models.reward_redemption import RewardRedemption
from app.models.revenue import WeeklyRevenue, DailyRevenue, MonthlyRevenueSummary
from app.models.feedback import EmployeeFeedback
from app.models.bonus_request import BonusRequest
from app.models.notification import Notification

from app.routes.auth import router as auth_router
from app.routes.me import router as me_router
from app.routes.events import router as events_router
from app.routes.requests import router as requests_router
from app.routes.redemptions import router as redemptions_router
from app.routes.bonus_requests import router as bonus_requests_router
from app.routes.feedback import router as feedback_router
from app.routes.notifications import router as notifications_router
from app.routes.revenue import router as revenue_router
from app.routes.dashboard import router as dashboard_router
from app.routes.employees import router as employees_router
from app.routes.stores import router as stores_router
from app.routes.event_settings import router as event_settings_router
from app.routes.rewards import router as rewards_router
from app.routes.ui_options import router as ui_options_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Incentive Engine")

# ─── CORS ─────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup():
    Base.metadata.create_all(bind=engine)


app.include_router(auth_router)
app.include_router(me_router)
app.include_router(events_router)
app.include_router(requests_router)
app.include_router(redemptions_router)
app.include_router(bonus_requests_router)
app.include_router(feedback_router)
app.include_router(notifications_router)
app.include_router(revenue_router)
app.include_router(dashboard_router)
app.include_router(employees_router)
app.include_router(stores_router)
app.include_router(event_settings_router)
app.include_router(rewards_router)
app.include_router(ui_options_router)


@app.get("/")
def read_root():
    return {"message": "Incentive Engine is running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8001, reload=True)
