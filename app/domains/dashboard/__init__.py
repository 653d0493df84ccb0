from app.domains.dashboard.schemas import DashboardStatsResponse
from app.domains.dashboard.services import DashboardService

__all__ = ["DashboardStatsResponse", "DashboardService"]
