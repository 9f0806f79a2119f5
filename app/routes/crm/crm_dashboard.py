from fastapi import APIRouter, Depends

from app.dependencies.storage import get_storage
from app.schemas.dashboard import DashboardStats, ReportSummary
from app.services.storage import Storage

router = APIRouter()


# -----------------------------
# 📊 Dashboard counters
# -----------------------------
@router.get("/dashboard/stats", response_model=DashboardStats)
def get_dashboard_stats(storage: Storage = Depends(get_storage)):
    return storage.get_dashboard_stats()


# -----------------------------
# 📈 Activity report
# -----------------------------
@router.get("/reports/summary", response_model=ReportSummary)
def get_report_summary(storage: Storage = Depends(get_storage)):
    return storage.get_report_summary()
