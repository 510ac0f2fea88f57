"""Repository for the Plant aggregate."""

from cultivation.domain import cultivation
from cultivation.plant.plant import Plant, PlantStatus

SORTABLE_FIELDS = ("planted_at", "potency", "name")


def _every(queryset) -> list:
    """Return every match of ``queryset`` regardless of the default page size."""
    total = queryset.all().total
    if not total:
        return []
    return queryset.limit(total).all().items


@cultivation.repository(part_of=Plant)
class PlantRepository:
    """Queries over planted stock.

    "Available" means planted and not held by any reservation. Age order is
    the planting timestamp, oldest first.
    """

    def _available(self, name: str):
        return self._dao.query.filter(
            name=name,
            status=PlantStatus.PLANTED.value,
            is_reserved=False,
        )

    def count_available(self, name: str) -> int:
        return self._available(name).all().total

    def oldest_available(self, name: str, count: int) -> list[Plant]:
        return self._available(name).order_by("planted_at").limit(count).all().items

    def reserved_under(self, reservation_id: str) -> list[Plant]:
        """Planted plants currently held by ``reservation_id``, oldest first."""
        return _every(
            self._dao.query.filter(
                reservation_id=reservation_id,
                status=PlantStatus.PLANTED.value,
                is_reserved=True,
            ).order_by("planted_at")
        )

    def search(self, text=None, status=None, sort_by="planted_at", descending=False) -> list[Plant]:
        """List plants, optionally filtered by status and a free-text match.

        The text is matched case-insensitively against name, taxonomic name
        and origin.
        """
        queryset = self._dao.query
        if status:
            queryset = queryset.filter(status=status)
        queryset = queryset.order_by(f"-{sort_by}" if descending else sort_by)

        plants = _every(queryset)
        if text:
            needle = text.lower()
            plants = [
                p
                for p in plants
                if needle in p.name.lower() or needle in p.taxonomic_name.lower() or needle in p.origin.lower()
            ]
        return plants
