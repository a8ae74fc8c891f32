from uuid import UUID

from strawberry.dataloader import DataLoader

from ..database.connection import get_async_session
from ..dbmodels import Prescriptions
from ..prescriptions import repository as prescriptions_repo


async def load_prescriptions(keys: list[UUID]) -> list[Prescriptions | None]:
    """Batch load prescriptions by ID."""
    async with get_async_session() as session:
        rows = await prescriptions_repo.find_by_ids(session, keys)
        rows_map = {row.id: row for row in rows}
        return [rows_map.get(key) for key in keys]


class Loaders:
    def __init__(self):
        self.prescription_loader = DataLoader(load_fn=load_prescriptions)
