"""Repository for the Warehouse aggregate."""

from warehousing.domain import warehousing
from warehousing.warehouse.warehouse import Warehouse


@warehousing.repository(part_of=Warehouse)
class WarehouseRepository:
    def all_by_creation(self) -> list[Warehouse]:
        """Every warehouse, oldest first, regardless of the default page size."""
        queryset = self._dao.query.order_by("created_at")
        total = queryset.all().total
        if not total:
            return []
        return queryset.limit(total).all().items
