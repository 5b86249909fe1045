"""Configuration constants for the pharmacy point-of-sale core."""

import os
from pathlib import Path

# Path to the Excel workbook holding the product catalog.
CATALOG_PATH: Path = Path(os.environ.get("PHARMACY_POS_CATALOG", "data/products.xlsx"))

# Sheet name inside the catalog workbook.
CATALOG_SHEET_NAME: str = "Products"

# Decimal places used for every rounded monetary/percentage output.
MONEY_PLACES: int = 2

# Largest accepted gap between a supplier's invoice amount and the computed total.
INVOICE_AMOUNT_TOLERANCE: float = 1.0

# Root log level for the desktop app.
LOG_LEVEL: str = os.environ.get("PHARMACY_POS_LOG_LEVEL", "INFO")

# Window title of the entry form.
WINDOW_TITLE: str = "Pharmacy Purchase Invoice"
