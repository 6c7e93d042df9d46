"""
Service preset repository.
"""
from typing import List, Optional
import logging

from ...models.entities import ServiceDef
from ..models import KEY_SERVICES
from .record_repository import RecordRepository

logger = logging.getLogger(__name__)

DEFAULT_SERVICES = (
    ("netflix", "Netflix", 5),
    ("spotify", "Spotify", 6),
    ("youtube", "YouTube Premium", 6),
    ("disney", "Disney+", 4),
)


class ServiceRepository:
    """Repository for known services and their default slot counts"""

    def __init__(self, db_path: str):
        self.records = RecordRepository(db_path)

    async def get_all_services(self) -> List[ServiceDef]:
        """Get stored presets, falling back to the built-in ones"""
        data = await self.records.load(KEY_SERVICES)
        if data is None:
            return [ServiceDef(id=i, name=n, default_slots=s) for i, n, s in DEFAULT_SERVICES]

        services = []
        for item in data:
            try:
                services.append(ServiceDef.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed service record: {e}")
        return services

    async def find_by_name(self, name: str) -> Optional[ServiceDef]:
        """Case-insensitive lookup by service name"""
        wanted = name.strip().lower()
        for service in await self.get_all_services():
            if service.name.lower() == wanted:
                return service
        return None

    async def save_services(self, services: List[ServiceDef]) -> None:
        """Replace the stored presets"""
        await self.records.save(KEY_SERVICES, [s.to_dict() for s in services])
