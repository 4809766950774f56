from fastapi import APIRouter

from ..schemas.widget import AnalyticsData
from ..services.analytics import mock_analytics


router = APIRouter(tags=["analytics"])


@router.get("/analytics", response_model=AnalyticsData)
async def analytics():
    """Dashboard summary. Numbers are demo data; no try-on events are recorded."""
    return mock_analytics()
