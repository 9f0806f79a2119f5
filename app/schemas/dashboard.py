from datetime import datetime
from typing import Dict

from app.schemas.common import CamelModel


class DashboardStats(CamelModel):
    total_clients: int = 0
    pending_followups: int = 0
    overdue_tasks: int = 0
    completed_this_week: int = 0


class ReportTotals(CamelModel):
    clients: int = 0
    tasks: int = 0
    follow_ups: int = 0


class ReportSummary(CamelModel):
    generated_at: datetime
    clients_this_month: int = 0
    tasks_completed_this_week: int = 0
    follow_ups_completed_this_week: int = 0
    client_status_distribution: Dict[str, int] = {}
    task_priority_distribution: Dict[str, int] = {}
    totals: ReportTotals = ReportTotals()
    task_completion_rate: int = 0
