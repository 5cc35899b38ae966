from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel

from truthlens.config import HISTORY_CONFIG
from truthlens.models.history import HistoryItem

# older rows used the legacy verdict names
VERIFIED_VERDICTS = frozenset({"verified", "legitimate"})
SUSPICIOUS_VERDICTS = frozenset({"suspicious", "uncertain"})
FAKE_VERDICTS = frozenset({"fake", "scam"})

TYPE_LABELS = (("text", "Text"), ("link", "Link"), ("image", "Image"))


class DailyCount(BaseModel):
    date: str
    count: int


class BreakdownEntry(BaseModel):
    name: str
    value: int


class DashboardStats(BaseModel):
    total: int
    verified: int
    suspicious: int
    fake: int
    bookmarked: int
    activity: List[DailyCount]
    verdicts: List[BreakdownEntry]
    types: List[BreakdownEntry]

    @classmethod
    def from_history(
        cls,
        items: Sequence[HistoryItem],
        today: Optional[date] = None,
        days: int = HISTORY_CONFIG.ACTIVITY_DAYS,
    ) -> "DashboardStats":
        today = today or datetime.now(timezone.utc).date()

        verified = sum(1 for i in items if i.verdict in VERIFIED_VERDICTS)
        suspicious = sum(1 for i in items if i.verdict in SUSPICIOUS_VERDICTS)
        fake = sum(1 for i in items if i.verdict in FAKE_VERDICTS)

        per_day: Dict[date, int] = {}
        for item in items:
            day = _day_of(item.created_at)
            per_day[day] = per_day.get(day, 0) + 1

        activity = []
        for offset in range(days - 1, -1, -1):
            day = today - timedelta(days=offset)
            activity.append(DailyCount(date=_label(day), count=per_day.get(day, 0)))

        verdicts = [
            BreakdownEntry(name=name, value=value)
            for name, value in (("Verified", verified), ("Suspicious", suspicious), ("Fake/Scam", fake))
            if value > 0
        ]
        types = []
        for kind, label in TYPE_LABELS:
            count = sum(1 for i in items if i.analysis_type == kind)
            if count > 0:
                types.append(BreakdownEntry(name=label, value=count))

        return cls(
            total=len(items),
            verified=verified,
            suspicious=suspicious,
            fake=fake,
            bookmarked=sum(1 for i in items if i.is_bookmarked),
            activity=activity,
            verdicts=verdicts,
            types=types,
        )


def _day_of(ts: datetime) -> date:
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc)
    return ts.date()


def _label(day: date) -> str:
    return f"{day.strftime('%b')} {day.day}"
