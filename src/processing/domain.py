"""Processing bounded context: turning harvested plants into perfumes.

Coordinates production runs: it works out how much raw stock a request
needs, replenishes and reserves it through the cultivation service,
harvests, normalizes potency and bottles the finished perfumes. Each run is
tracked by a ProductionRun aggregate so that a failed run can be
compensated or reconciled.
"""

from protean.domain import Domain

from shared.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

processing = Domain(name="processing")
