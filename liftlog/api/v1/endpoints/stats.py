"""Training summary endpoint."""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.api.deps import get_actor
from liftlog.core.identity import Actor
from liftlog.db.session import get_db
from liftlog.schemas.records import TrainingSummaryRead
from liftlog.services.stats_reader import StatsReader

router = APIRouter()


@router.get("/summary", response_model=TrainingSummaryRead)
async def training_summary(
    today: date | None = None,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Workouts in the last 7 / 30 days and volume of the last 7 days."""
    return await StatsReader(db).training_summary(actor, today=today)
