"""
Admin — inventory editing over SQLite.

Every write: remote write → mirror patch → invalidate → reload.
A failed write leaves the mirror and the open form untouched.

Run: python -m examples.admin_example
"""

from kungfu import Ok, Error

from storefront.admin import AdminGate, AdminWorkflow
from storefront.catalog import ProductCache, SQLAlchemyProductService, create_database
from storefront.config import settings
from examples._infra import DRAFTS, DemoAuthenticator, banner, run


async def main() -> None:
    banner("Admin: Edit Workflow")

    session_factory, engine = await create_database(settings.database_url)
    catalog = ProductCache(SQLAlchemyProductService(session_factory))

    try:
        for draft in DRAFTS:
            (await catalog.create(draft)).unwrap()

        gate = AdminGate(DemoAuthenticator())
        workflow = AdminWorkflow(catalog, gate)

        print("\n1. Without login:")
        match workflow.start_add():
            case Error(e):
                print(f"   {e}")
            case Ok(_):
                pass

        (await gate.login("demo-token")).unwrap()

        print("\n2. Add product:")
        workflow.start_add()
        workflow.update_form(sku="TRY-01", title="Rolling tray", price="19,90", stock="6")
        match await workflow.save():
            case Ok(product):
                print(f"   saved {product.sku} ({product.id}); mode={type(workflow.mode).__name__}")
            case Error(e):
                print(f"   error: {e}")

        print("\n3. Duplicate SKU (remote write fails, form kept):")
        workflow.start_add()
        workflow.update_form(sku="TRY-01", title="Second tray", price="10")
        match await workflow.save():
            case Ok(_):
                print("   unexpected success")
            case Error(e):
                print(f"   {e}; still adding={workflow.adding}")
        await workflow.cancel()

        print("\n4. Restock:")
        workflow.start_bulk_stock()
        vaporizer = catalog.get_product_by_sku("VAP-01")
        match await workflow.update_stock(vaporizer.id, "5"):
            case Ok(product):
                print(f"   {product.sku} stock → {product.stock}")
            case Error(e):
                print(f"   error: {e}")

        print(f"\n5. Listing: {[(p.sku, p.stock) for p in workflow.products]}")
    finally:
        await engine.dispose()

    print("\nDone!")


if __name__ == "__main__":
    run(main)
