"""Repositories for the ProductionRun and Perfume aggregates."""

from processing.domain import processing
from processing.production.perfume import Perfume
from processing.production.run import ProductionRun


@processing.repository(part_of=ProductionRun)
class ProductionRunRepository:
    def find_by_idempotency_key(self, idempotency_key: str) -> ProductionRun | None:
        return self._dao.query.filter(idempotency_key=idempotency_key).all().first


@processing.repository(part_of=Perfume)
class PerfumeRepository:
    def latest_in_category(self, category: str, count: int) -> list[Perfume]:
        """The ``count`` most recently bottled perfumes of a category."""
        return self._dao.query.filter(category=category).order_by("-created_at").limit(count).all().items

    def bottled_in_run(self, run: ProductionRun) -> list[Perfume]:
        """Perfumes bottled by ``run``, in the order the run allocated them."""
        order = {entry["perfume_id"]: index for index, entry in enumerate(run.allocated)}
        perfumes = self._dao.query.filter(run_id=str(run.id)).limit(max(len(order), 1)).all().items
        return sorted(perfumes, key=lambda perfume: order.get(str(perfume.id), len(order)))
