"""Repository for the Package aggregate."""

from warehousing.domain import warehousing
from warehousing.package.package import Package, PackageStatus


@warehousing.repository(part_of=Package)
class PackageRepository:
    def stored_oldest_first(self, limit: int) -> list[Package]:
        """Up to ``limit`` stored packages, longest-stored first."""
        return (
            self._dao.query.filter(status=PackageStatus.STORED.value)
            .order_by("stored_at")
            .limit(limit)
            .all()
            .items
        )

    def count_stored(self, warehouse_id: str | None = None) -> int:
        queryset = self._dao.query.filter(status=PackageStatus.STORED.value)
        if warehouse_id:
            queryset = queryset.filter(warehouse_id=warehouse_id)
        return queryset.all().total
