"""Storefront bounded context: client-side commerce state.

Holds the shopper's cart, the catalog query state, checkout pricing and the
admin session gate. The HTTP backend is an external collaborator reached
through ``storefront.client``.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
