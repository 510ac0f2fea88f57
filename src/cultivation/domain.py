"""Cultivation bounded context: the lifecycle of plants.

Owns the raw agricultural stock. Plants are planted (individually or in
batches), may have their potency scaled, can be reserved for a production
run and are harvested oldest first.
"""

from protean.domain import Domain

from shared.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

cultivation = Domain(name="cultivation")
