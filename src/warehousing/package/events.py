"""Domain events for the Package aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from warehousing.domain import warehousing


@warehousing.event(part_of="Package")
class PackagePacked:
    """Perfumes were packed into a labelled package."""

    __version__ = 1

    package_id = Identifier(required=True)
    label = String(required=True)
    sender_address = String(required=True)
    perfume_ids = Text(required=True)  # JSON list
    packed_at = DateTime(required=True)


@warehousing.event(part_of="Package")
class PackageStored:
    """A package was placed in a warehouse."""

    __version__ = 1

    package_id = Identifier(required=True)
    warehouse_id = Identifier(required=True)
    stored_at = DateTime(required=True)


@warehousing.event(part_of="Package")
class PackageDelivered:
    """A stored package left its warehouse."""

    __version__ = 1

    package_id = Identifier(required=True)
    warehouse_id = Identifier()
    role = String(required=True)
    delivered_at = DateTime(required=True)
