"""
Storefront — a shopper session from browsing to checkout.

Flow:
    load → filter → add to cart → quote → select service → checkout

Run: python -m examples.storefront_example
"""

from kungfu import Ok, Error

from storefront import Storefront
from storefront.catalog import MemoryProductService, ProductCache
from storefront.config import settings
from storefront.shipping import ServiceLevel
from examples._infra import DRAFTS, FakeQuotes, banner, run


async def main() -> None:
    banner("Storefront: Cart, Shipping, Checkout")

    service = MemoryProductService()
    for draft in DRAFTS:
        await service.insert(draft)

    quotes = FakeQuotes()
    shop = Storefront.from_settings(ProductCache(service), settings, fetch_json=quotes)

    (await shop.load()).unwrap()
    print(f"\n1. Catalog: {[p.sku for p in shop.products]}")

    shop.toggle_category("papers")
    print(f"   Filtered: {[p.sku for p in shop.visible_products]}")
    shop.clear_categories()

    print("\n2. Stock bound (BNG-01 has 1 unit):")
    for _ in range(2):
        shop.add_to_cart("BNG-01")
        print(f"   {shop.notices.current}")

    shop.add_to_cart("PAP-01")
    totals = shop.totals
    print(f"\n3. Subtotal {totals.subtotal}, {totals.free_shipping_remaining} to free shipping")

    print("\n4. Quote:")
    match await shop.fetch_quote("01310-100"):
        case Ok(quote):
            for level in ServiceLevel:
                service_quote = quote.service(level)
                print(
                    f"   {level.label}: {shop.shipping_price(level)} "
                    f"(quoted {service_quote.rate}, {service_quote.lead_time_days} days)"
                )
        case Error(e):
            print(f"   error: {e}")

    shop.select_shipping(ServiceLevel.EXPRESS)
    print(f"   Total with SEDEX: {shop.totals.total}")

    print("\n5. Checkout:")
    match shop.checkout("ana@example.com", "01310-100"):
        case Ok(receipt):
            print(f"   Order {receipt.order_id}: {receipt.totals.total} via {receipt.shipping_method}")
        case Error(e):
            print(f"   rejected: {e}")

    print(f"   Cart empty: {shop.cart.is_empty}, quote calls: {quotes.calls}")
    shop.close()
    print("\nDone!")


if __name__ == "__main__":
    run(main)
