from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.domain import Round


class RoundRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, round_id: int) -> Round | None:
        res = await self.db.execute(select(Round).where(Round.id == round_id))
        return res.scalar_one_or_none()

    async def get_active(self, round_id: int) -> Round | None:
        res = await self.db.execute(select(Round).where(Round.id == round_id, Round.is_active.is_(True)))
        return res.scalar_one_or_none()

    async def list_active(self) -> list[Round]:
        res = await self.db.execute(
            select(Round).where(Round.is_active.is_(True)).order_by(Round.round_number, Round.id)
        )
        return list(res.scalars().all())

    async def count(self) -> int:
        res = await self.db.execute(select(func.count(Round.id)))
        return int(res.scalar() or 0)

    async def add_all(self, rows: list[Round]) -> None:
        self.db.add_all(rows)
        await self.db.flush()
