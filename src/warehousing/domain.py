"""Warehousing bounded context: package intake and dispatch.

Warehouses store packed perfumes up to a fixed capacity. Stored packages
leave in throttled batches whose size and pacing depend on the role of the
caller (distribution centre or depot).
"""

from protean.domain import Domain

from shared.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

warehousing = Domain(name="warehousing")
