import logging

from carrental.config import load_settings
from carrental.models.store import Store
from carrental.services.seed_service import SeedService


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = load_settings()
    store = Store(settings.data_path)

    # ---- Roles are created by the store; admin and demo cars here ----
    SeedService.ensure_defaults(store)
    store.save()

    print("✅ Seed complete.")
    print(f"🔑 Admin login: admin / admin123 ({len(store.cars)} cars in store)")


if __name__ == "__main__":
    main()
