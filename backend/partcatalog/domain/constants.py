# backend/partcatalog/domain/constants.py

"""
Katalog genelinde sabit değerlerin tek kaynağı.
"""

from typing import Final, Tuple

PRICE_FIXED: Final[str] = "fixed"
PRICE_NON_FIXED: Final[str] = "non_fixed"
PRICE_TYPES: Final[Tuple[str, ...]] = (PRICE_FIXED, PRICE_NON_FIXED)

# Kimlik servisindeki roller
ROLE_ADMIN: Final[str] = "admin"
ROLE_CYNTEK_ADMIN: Final[str] = "cyntek_admin"
ROLE_ORG_ADMIN: Final[str] = "org_admin"
ROLE_USER: Final[str] = "user"
ALLOWED_ROLES: Final[Tuple[str, ...]] = (ROLE_ADMIN, ROLE_CYNTEK_ADMIN, ROLE_ORG_ADMIN, ROLE_USER)
CATALOG_ADMIN_ROLES: Final[Tuple[str, ...]] = (ROLE_ADMIN, ROLE_CYNTEK_ADMIN)

# Formdaki "uygulama yok" seçimi
NO_APPLICATION: Final[str] = "__none__"

# Stok durum kovaları: 0 = yok, 1..LOW_STOCK_MAX = az, üstü = var
LOW_STOCK_MAX: Final[int] = 5
STOCK_OUT: Final[str] = "out_of_stock"
STOCK_LOW: Final[str] = "low_stock"
STOCK_IN: Final[str] = "in_stock"
STOCK_STATUSES: Final[Tuple[str, ...]] = (STOCK_OUT, STOCK_LOW, STOCK_IN)

# Toplu yükleme (CSV)
CSV_TEMPLATE_HEADERS: Final[Tuple[str, ...]] = (
    "manufacturer_part_number",
    "manufacturer",
    "client_part_number",
    "name",
    "description",
    "machine",
    "assembly",
    "part_type",
    "voltage",
    "shaft_size",
    "gearbox_ratio",
    "power_rating_hp",
    "power_rating_kw",
    "estimated_lead_time_days",
    "price_type",
    "unit_price",
    "repair_price",
    "is_repairable",
)
CSV_REQUIRED_HEADERS: Final[Tuple[str, ...]] = ("manufacturer_part_number", "manufacturer", "name", "price_type")
CSV_TEMPLATE_SAMPLE_ROWS: Final[Tuple[str, ...]] = (
    "MPN001,Acme Corp,,Sample Gearbox,High-performance industrial gearbox,Machine A,Assembly 1,Gearbox,480V,25mm,10:1,5,3.7,30,fixed,99.99,,false",
    "MPN002,Beta Industries,CLIENT123,Motor Drive Unit,Variable speed motor drive,Machine B,Assembly 2,Motor,240V,30mm,20:1,10,7.5,45,non_fixed,,,true",
)
CSV_TEMPLATE_FILENAME: Final[str] = "parts_template.csv"

MAX_PAGE_SIZE: Final[int] = 500
