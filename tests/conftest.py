"""Shared fixtures for the pharmacy POS tests."""

import pytest
from openpyxl import Workbook

from pharmacy_pos.data.catalog_repo import REQUIRED_COLUMNS
from pharmacy_pos.models.product import Product


CATALOG_ROWS = [
    [1, "Panadol 500mg", 10, 100, None, 150, None],
    [2, "Augmentin 625mg", 6, 540, 90, 720, 120],
    ["SYR-3", "Brufen Syrup", 1, 85.5, 85.5, 110, 110],
    [None, "Orphan row", 1, 1, 1, 1, 1],
    [4, "Bad Numbers", "abc", "", None, "n/a", None],
]


@pytest.fixture
def catalog_path(tmp_path):
    """An Excel catalog workbook with a handful of products."""
    path = tmp_path / "products.xlsx"
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Products"
    sheet.append(REQUIRED_COLUMNS)
    for row in CATALOG_ROWS:
        sheet.append(row)
    workbook.save(path)
    return path


@pytest.fixture
def panadol():
    return Product(
        product_id="1",
        name="Panadol 500mg",
        pack_size=10,
        pack_purchase_price=100,
        pack_sale_price=150,
    )
