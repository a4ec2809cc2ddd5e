from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import logging

from app.models.reading import Reading
from app.schemas.reading import ReadingCreate
from app.core.exceptions import StoreError

logger = logging.getLogger(__name__)


class ReadingService:
    """Service layer for energy readings"""

    def __init__(self, db: AsyncSession, limit: int = 100):
        self.db = db
        self.limit = limit

    async def add_reading(self, user_id: int, reading_data: ReadingCreate) -> Reading:
        """Insert one immutable reading; the timestamp comes from the database"""
        db_reading = Reading(
            user_id=user_id,
            power_w=reading_data.power,
            energy_wh=reading_data.energy,
            cost=reading_data.cost,
        )

        try:
            self.db.add(db_reading)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to save reading for user {user_id}: {e}")
            raise StoreError("Failed to save reading")

        logger.debug(f"Reading saved for user {user_id}")
        return db_reading

    async def list_readings(self, user_id: int) -> List[Reading]:
        """Most recent readings first, at most ``limit`` rows"""
        try:
            stmt = (
                select(Reading)
                .where(Reading.user_id == user_id)
                .order_by(desc(Reading.timestamp), desc(Reading.id))
                .limit(self.limit)
            )
            result = await self.db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch readings for user {user_id}: {e}")
            raise StoreError("Failed to fetch readings")


def get_reading_service(db: AsyncSession, limit: int = 100) -> ReadingService:
    """Build a reading service for the request's session"""
    return ReadingService(db, limit)
