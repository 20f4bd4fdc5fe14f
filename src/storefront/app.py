"""Composition root: wires settings, storage, client and state holders."""

from dataclasses import dataclass

from storefront.admin.console import AdminConsole
from storefront.admin.guard import SessionGuard
from storefront.cart.store import CartStore
from storefront.catalogue.query import CatalogQuery
from storefront.checkout.placement import CheckoutService
from storefront.checkout.pricing import PricingEngine
from storefront.client import StorefrontClient
from storefront.config import Settings, load_settings
from storefront.domain import logger, storefront
from storefront.storage import FileStorage
from storefront.utils.logging import configure_logging


@dataclass
class Storefront:
    settings: Settings
    client: StorefrontClient
    cart: CartStore
    pricing: PricingEngine
    checkout: CheckoutService
    catalog: CatalogQuery
    guard: SessionGuard
    admin: AdminConsole


def build(settings: Settings, storage=None, client=None) -> Storefront:
    """Assemble the storefront objects. The domain must already be initialised."""
    storage = storage if storage is not None else FileStorage(settings.data_dir)
    client = client or StorefrontClient(settings.backend_url, timeout=settings.http_timeout)

    cart = CartStore(storage, key=settings.cart_key)
    guard = SessionGuard(
        storage,
        key=settings.token_key,
        demote_on_unauthorized=settings.demote_on_unauthorized,
    )
    return Storefront(
        settings=settings,
        client=client,
        cart=cart,
        pricing=PricingEngine(cart),
        checkout=CheckoutService(cart, client),
        catalog=CatalogQuery(),
        guard=guard,
        admin=AdminConsole(guard, client),
    )


def bootstrap(settings: Settings | None = None, storage=None, client=None) -> Storefront:
    """Configure logging, initialise the domain and push its context for this process."""
    settings = settings or load_settings()
    configure_logging(log_dir=settings.log_dir)

    storefront.init()
    storefront.domain_context().push()

    logger.debug("storefront_bootstrapped", backend_url=settings.backend_url, data_dir=settings.data_dir)
    return build(settings, storage=storage, client=client)
