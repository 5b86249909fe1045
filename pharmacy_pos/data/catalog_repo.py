"""Excel repository for the product catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from pharmacy_pos import config
from pharmacy_pos.models.product import Product

logger = logging.getLogger(__name__)


def _normalize_id(value) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


REQUIRED_COLUMNS = [
    "Product_Id",
    "Name",
    "Pack_Size",
    "Pack_Purchase_Price",
    "Unit_Purchase_Price",
    "Pack_Sale_Price",
    "Unit_Sale_Price",
]


@dataclass
class CatalogColumnMap:
    """Column indexes for required fields."""

    product_id: int
    name: int
    pack_size: int
    pack_purchase_price: int
    unit_purchase_price: int
    pack_sale_price: int
    unit_sale_price: int


class ExcelCatalogRepository:
    """Reads product defaults (pack size and prices) from an Excel sheet."""

    def __init__(self, path: Path | str = None, sheet_name: Optional[str] = None) -> None:
        self.path: Path = Path(path) if path else config.CATALOG_PATH
        self.sheet_name = sheet_name or config.CATALOG_SHEET_NAME
        if not self.path.exists():
            raise FileNotFoundError(f"Catalog file not found: {self.path}")

        self._workbook = load_workbook(self.path, read_only=True, data_only=True)
        try:
            if self.sheet_name not in self._workbook.sheetnames:
                raise ValueError(f"Sheet '{self.sheet_name}' not found in catalog file.")

            self._sheet: Worksheet = self._workbook[self.sheet_name]
            self._columns = self._detect_columns()
            self._products: Dict[str, Product] = {p.product_id: p for p in self._read_products()}
        finally:
            # Read-only workbooks hold the file open until closed.
            self._workbook.close()
        logger.info("Loaded %d products from %s", len(self._products), self.path)

    def _detect_columns(self) -> CatalogColumnMap:
        """Detect columns from header row; raises if missing."""
        headers: Dict[str, int] = {}
        header_row = next(self._sheet.iter_rows(min_row=1, max_row=1), ())
        for idx, cell in enumerate(header_row, start=1):
            if cell.value is not None:
                headers[str(cell.value).strip()] = idx

        missing = [col for col in REQUIRED_COLUMNS if col not in headers]
        if missing:
            raise ValueError(f"Missing required columns in catalog: {', '.join(missing)}")

        return CatalogColumnMap(
            product_id=headers["Product_Id"],
            name=headers["Name"],
            pack_size=headers["Pack_Size"],
            pack_purchase_price=headers["Pack_Purchase_Price"],
            unit_purchase_price=headers["Unit_Purchase_Price"],
            pack_sale_price=headers["Pack_Sale_Price"],
            unit_sale_price=headers["Unit_Sale_Price"],
        )

    def _read_products(self) -> List[Product]:
        products: List[Product] = []
        for row_idx, row in enumerate(self._sheet.iter_rows(min_row=2, values_only=True), start=2):
            product_id = self._cell(row, self._columns.product_id)
            if product_id in (None, ""):
                continue
            name = self._cell(row, self._columns.name)
            if not name:
                logger.warning("Skipping catalog row %d: product %s has no name", row_idx, product_id)
                continue

            products.append(
                Product(
                    product_id=_normalize_id(product_id),
                    name=str(name),
                    pack_size=self._to_float(self._cell(row, self._columns.pack_size), default=0.0),
                    pack_purchase_price=self._to_float(
                        self._cell(row, self._columns.pack_purchase_price), default=0.0
                    ),
                    unit_purchase_price=self._to_float(
                        self._cell(row, self._columns.unit_purchase_price), default=None
                    ),
                    pack_sale_price=self._to_float(self._cell(row, self._columns.pack_sale_price), default=0.0),
                    unit_sale_price=self._to_float(self._cell(row, self._columns.unit_sale_price), default=None),
                )
            )
        return products

    @staticmethod
    def _cell(row, column: int):
        return row[column - 1] if column - 1 < len(row) else None

    @staticmethod
    def _to_float(value, default: Optional[float]) -> Optional[float]:
        if value in (None, ""):
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def list_products(self) -> List[Product]:
        """Return all products in sheet order."""
        return list(self._products.values())

    def get_product(self, product_id: str) -> Product:
        """Return a product by id. Raises KeyError if not found."""
        try:
            return self._products[_normalize_id(product_id)]
        except KeyError:
            raise KeyError(f"Product '{product_id}' not found.") from None

    def find_by_name(self, name: str) -> Optional[Product]:
        """Case-insensitive lookup by display name."""
        wanted = str(name).strip().lower()
        for product in self._products.values():
            if product.name.strip().lower() == wanted:
                return product
        return None
