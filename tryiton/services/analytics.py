from datetime import datetime, timedelta, timezone
from typing import Optional

from ..schemas.widget import Activity, AnalyticsData, ChartPoint, TopProduct


def format_time_ago(when: datetime, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(tz=timezone.utc)
    minutes = int((now - when).total_seconds() // 60)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if minutes < 60 * 24:
        return f"{minutes // 60}h ago"
    return f"{minutes // (60 * 24)}d ago"


# (id, action, product, minutes ago, success)
_ACTIVITY = [
    ("1", "completed virtual try-on", "Classic Denim Jacket", 5, True),
    ("2", "completed virtual try-on", "Cotton T-Shirt", 15, True),
    ("3", "attempted try-on (failed)", "Leather Handbag", 23, False),
    ("4", "completed virtual try-on", "Classic Denim Jacket", 45, True),
    ("5", "completed virtual try-on", "Summer Dress", 60, True),
]


def mock_analytics(now: Optional[datetime] = None) -> AnalyticsData:
    """Static dashboard numbers; activity timestamps are relative to now."""
    now = now or datetime.now(tz=timezone.utc)
    total, successful = 1247, 1189
    activity = []
    for aid, action, product, minutes, success in _ACTIVITY:
        ts = now - timedelta(minutes=minutes)
        activity.append(Activity(
            id=aid,
            action=action,
            product=product,
            timestamp=ts,
            timeAgo=format_time_ago(ts, now),
            success=success,
        ))
    return AnalyticsData(
        totalTryOns=total,
        successfulTryOns=successful,
        successRate=round(successful * 100.0 / total, 1),
        uniqueUsers=423,
        topProducts=[
            TopProduct(id="1", name="WhiteFox Tshirt", tryOns=456, successRate=96),
            TopProduct(id="2", name="Cotton T-Shirt", tryOns=398, successRate=94),
            TopProduct(id="3", name="Leather Handbag", tryOns=234, successRate=92),
            TopProduct(id="4", name="Summer Dress", tryOns=159, successRate=97),
        ],
        chartData=[
            ChartPoint(month="Jan", successful=145, failed=8),
            ChartPoint(month="Feb", successful=178, failed=12),
            ChartPoint(month="Mar", successful=203, failed=9),
            ChartPoint(month="Apr", successful=234, failed=11),
            ChartPoint(month="May", successful=289, failed=15),
            ChartPoint(month="Jun", successful=320, failed=13),
        ],
        recentActivity=activity,
    )
