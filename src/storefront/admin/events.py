"""Domain events for the AdminSession aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="AdminSession")
class AdminSignedIn:
    __version__ = 1

    session_id = Identifier(required=True)
    signed_in_at = DateTime(required=True)


@storefront.event(part_of="AdminSession")
class AdminSignedOut:
    __version__ = 1

    session_id = Identifier(required=True)
    reason = String(max_length=50, required=True)
    signed_out_at = DateTime(required=True)
