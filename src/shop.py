"""Handestiy storefront command line.

A thin presentation layer over the storefront state engine: browse the
catalog, manage the cart, check out, and run admin tasks.

Usage:
    python src/shop.py home
    python src/shop.py catalog --category Pots --sort price_asc --page 2
    python src/shop.py add terracotta-pot --qty 2
    python src/shop.py cart
    python src/shop.py checkout --name Ada --email ada@example.com --address "1 Clay St"
    python src/shop.py admin-login --email admin@handestiy.com --password secret
    python src/shop.py admin-status 65f0c0ffee Shipped
"""

import argparse
import sys

from protean.exceptions import ValidationError

from storefront.catalogue.filter import CATEGORIES, SortOrder
from storefront.catalogue.showcase import load_showcase
from storefront.checkout.pricing import Customer, ShippingMethod
from storefront.client.schemas import OrderStatus
from storefront.exceptions import InvalidCredentials, LoginRequired, StorefrontError
from storefront.utils.logging import add_context


def _money(amount):
    return f"${amount:.2f}"


def show_catalog(app, args):
    query = app.catalog
    query.filter = query.filter.with_category(args.category).with_sort(args.sort).with_page(args.page)
    query.fetch(app.client)

    print(f"{query.total} items - page {query.filter.page} of {query.page_count}")
    for product in query.items:
        print(f"  {product.slug or product.id:<30} {_money(product.effective_price):>10}  {product.title}")
    if not query.items:
        print("  (no products on this page)")
    return 0


def show_home(app, args):
    showcase = load_showcase(app.client)
    for heading, products in (("New arrivals", showcase.new_arrivals), ("Best sellers", showcase.best_sellers)):
        print(f"{heading}:")
        for product in products:
            print(f"  {product.slug or product.id:<30} {_money(product.effective_price):>10}  {product.title}")
    return 0


def show_product(app, args):
    product = app.client.product(args.slug)
    if product is None:
        print(f"Product not found: {args.slug}")
        return 1
    print(f"{product.title} - {_money(product.effective_price)}")
    print(f"  Category: {product.category}  Stock: {product.stock}")
    if product.long_description or product.short_description:
        print(f"  {product.long_description or product.short_description}")
    return 0


def add_to_cart(app, args):
    product = app.client.product(args.slug)
    if product is None:
        print(f"Product not found: {args.slug}")
        return 1
    app.cart.add(product, args.qty)
    print(f"Added {args.qty} x {product.title}. Cart subtotal: {_money(app.cart.subtotal())}")
    return 0


def show_cart(app, args):
    if app.cart.is_empty():
        print("Your cart is empty.")
        return 0
    for line in app.cart.lines:
        print(f"  {line.product_id:<26} {line.quantity:>3} x {_money(line.unit_price):>9}  {line.title}")
    print(f"Subtotal: {_money(app.cart.subtotal())} (shipping calculated at checkout)")
    return 0


def set_quantity(app, args):
    app.cart.set_quantity(args.product_id, args.qty)
    return show_cart(app, args)


def remove_line(app, args):
    app.cart.remove(args.product_id)
    return show_cart(app, args)


def checkout(app, args):
    app.pricing.select_method(ShippingMethod.EXPRESS if args.express else ShippingMethod.STANDARD)
    price = app.pricing.quote()
    customer = Customer(name=args.name, email=args.email, phone=args.phone, address=args.address)

    placed = app.checkout.place_order(customer, app.pricing.method)
    print(f"Order placed: {placed.order_id}")
    print(f"  Subtotal {_money(price.subtotal)}  Shipping {_money(price.shipping_cost)}  Total {_money(price.total)}")
    return 0


def show_order(app, args):
    order = app.checkout.confirmation(args.order_id)
    if order is None:
        print(f"Order not found: {args.order_id}")
        return 1
    print(f"Order {order.id} - {order.status}")
    for item in order.items:
        print(f"  {item.quantity} x {item.title}  {_money(item.price * item.quantity)}")
    print(f"Subtotal {_money(order.subtotal)}  Shipping {_money(order.shipping)}  Total {_money(order.total)}")
    return 0


def admin_login(app, args):
    app.guard.login(app.client, args.email, args.password)
    print("Logged in.")
    return 0


def admin_logout(app, args):
    app.guard.logout()
    print("Logged out.")
    return 0


def admin_orders(app, args):
    stats = app.admin.dashboard()
    print(f"Total sales: {_money(stats.total_sales)}  Orders: {stats.order_count}")
    for order in stats.recent_orders:
        print(f"  {order.id:<26} {order.customer.name:<20} {_money(order.total):>10}  {order.status}")
    return 0


def admin_status(app, args):
    app.admin.update_order_status(args.order_id, args.status)
    print(f"Order {args.order_id} marked {args.status}.")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(description="Handestiy storefront")
    subparsers = parser.add_subparsers(dest="command", required=True)

    catalog_parser = subparsers.add_parser("catalog", help="Browse the catalog")
    catalog_parser.add_argument("--category", default=CATEGORIES[0])
    catalog_parser.add_argument("--sort", choices=[s.value for s in SortOrder], default=SortOrder.NEWEST.value)
    catalog_parser.add_argument("--page", type=int, default=1)
    catalog_parser.set_defaults(handler=show_catalog)

    home_parser = subparsers.add_parser("home", help="New arrivals and best sellers")
    home_parser.set_defaults(handler=show_home)

    product_parser = subparsers.add_parser("product", help="Show a product")
    product_parser.add_argument("slug")
    product_parser.set_defaults(handler=show_product)

    add_parser = subparsers.add_parser("add", help="Add a product to the cart")
    add_parser.add_argument("slug")
    add_parser.add_argument("--qty", type=int, default=1)
    add_parser.set_defaults(handler=add_to_cart)

    cart_parser = subparsers.add_parser("cart", help="Show the cart")
    cart_parser.set_defaults(handler=show_cart)

    qty_parser = subparsers.add_parser("set-qty", help="Set a cart line's quantity")
    qty_parser.add_argument("product_id")
    qty_parser.add_argument("qty", type=int)
    qty_parser.set_defaults(handler=set_quantity)

    remove_parser = subparsers.add_parser("remove", help="Remove a cart line")
    remove_parser.add_argument("product_id")
    remove_parser.set_defaults(handler=remove_line)

    checkout_parser = subparsers.add_parser("checkout", help="Place an order for the cart")
    checkout_parser.add_argument("--name", required=True)
    checkout_parser.add_argument("--email", required=True)
    checkout_parser.add_argument("--phone", default="")
    checkout_parser.add_argument("--address", required=True)
    checkout_parser.add_argument("--express", action="store_true")
    checkout_parser.set_defaults(handler=checkout)

    order_parser = subparsers.add_parser("order", help="Show a placed order")
    order_parser.add_argument("order_id")
    order_parser.set_defaults(handler=show_order)

    login_parser = subparsers.add_parser("admin-login", help="Log in as admin")
    login_parser.add_argument("--email", required=True)
    login_parser.add_argument("--password", required=True)
    login_parser.set_defaults(handler=admin_login)

    logout_parser = subparsers.add_parser("admin-logout", help="Log out")
    logout_parser.set_defaults(handler=admin_logout)

    orders_parser = subparsers.add_parser("admin-orders", help="Dashboard and order list")
    orders_parser.set_defaults(handler=admin_orders)

    status_parser = subparsers.add_parser("admin-status", help="Change an order's status")
    status_parser.add_argument("order_id")
    status_parser.add_argument("status", choices=[s.value for s in OrderStatus])
    status_parser.set_defaults(handler=admin_status)

    return parser


def main(argv=None, app=None):
    args = build_parser().parse_args(argv)

    if app is None:
        from storefront.app import bootstrap

        app = bootstrap()

    add_context(command=args.command)
    try:
        return args.handler(app, args)
    except ValidationError as exc:
        print(f"Error: {exc.messages}")
    except LoginRequired:
        print("Admin login required. Run: shop.py admin-login")
    except InvalidCredentials:
        print("Invalid credentials")
    except StorefrontError as exc:
        print(f"Error: {exc}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
