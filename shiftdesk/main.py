import logging

from fastapi import FastAPI
from shiftdesk.api.routes import blocked_periods, employees, schedule, shift_exchange, shifts, time_off_requests
from shiftdesk.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="ShiftDesk API", version="0.1.0", debug=settings.DEBUG)

app.include_router(shifts.router, prefix="/api/v1")
app.include_router(time_off_requests.router, prefix="/api/v1")
app.include_router(blocked_periods.router, prefix="/api/v1")
app.include_router(shift_exchange.router, prefix="/api/v1")
app.include_router(employees.router, prefix="/api/v1")
app.include_router(schedule.router, prefix="/api/v1")


@app.get("/health")
def health_check():
    return {"status": "ok"}
