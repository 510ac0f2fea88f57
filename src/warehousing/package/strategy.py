"""Dispatch strategies: how fast each role may ship stored packages."""

from dataclasses import dataclass
from enum import Enum

from protean.exceptions import ValidationError


class DispatchRole(Enum):
    DISTRIBUTION = "distribution"
    DEPOT = "depot"


@dataclass(frozen=True)
class DispatchStrategy:
    role: str
    max_packages_per_batch: int
    inter_batch_delay: float  # seconds

    def batches(self, items: list) -> list[list]:
        size = self.max_packages_per_batch
        return [items[start : start + size] for start in range(0, len(items), size)]


STRATEGIES = {
    DispatchRole.DISTRIBUTION.value: DispatchStrategy(DispatchRole.DISTRIBUTION.value, 3, 0.5),
    DispatchRole.DEPOT.value: DispatchStrategy(DispatchRole.DEPOT.value, 1, 2.5),
}

DEFAULT_ROLE = DispatchRole.DEPOT.value


def strategy_for_role(role: str | None) -> DispatchStrategy:
    """Strategy for ``role``; a missing role means depot."""
    key = (role or DEFAULT_ROLE).strip().lower()
    try:
        return STRATEGIES[key]
    except KeyError:
        raise ValidationError({"role": [f"Unknown dispatch role: {role}"]}) from None
