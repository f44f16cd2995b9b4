"""
reset_data.py
-------------
Utility script to clear all stored records (customers, cars, rentals) from the
data file named by DATA_PATH (default: data.pkl at the repository root).

This script is designed for development and testing purposes.
Roles ADMIN and CUSTOMER are re-created right away since they are reference data.

Usage:
    $ python reset_data.py

After running this script, you can repopulate sample data by executing:
    $ python seeds.py
"""

from carrental.config import load_settings
from carrental.models.store import Store


def main():
    """Clear every record from the persistent store and save the empty state."""
    settings = load_settings()
    store = Store(settings.data_path)

    store.clear()
    store.save()

    print(f"✅ {settings.data_path or 'in-memory store'} has been successfully cleared.")
    print("💡 Tip: Run `python seeds.py` to regenerate demo data.")


if __name__ == "__main__":
    main()
