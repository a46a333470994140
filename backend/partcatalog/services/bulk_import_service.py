# backend/partcatalog/services/bulk_import_service.py
"""
CSV ile toplu parça yükleme.

Akış: dosya bazlı kontroller (organizasyon, uygulama, başlık, kolon sayısı)
-> satır satır doğrulama -> satır başına bir transaction
(Part + organizasyon override) -> opsiyonel uygulama bağlantısı.

Dosya bazlı hata hiçbir satır yazılmadan ValidationError (400) olarak döner.
Satır hatası batch'i durdurmaz; "Row <satır no>: <neden>" olarak biriktirilir.
Aynı üretici parça numarası tekrar gelirse yeni bir Part oluşur (birleştirme yok).
"""
from __future__ import annotations
import csv
import io
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from partcatalog.core.errors import RowError, ValidationError
from partcatalog.domain.constants import (
    CSV_REQUIRED_HEADERS,
    CSV_TEMPLATE_HEADERS,
    CSV_TEMPLATE_SAMPLE_ROWS,
    NO_APPLICATION,
    PRICE_TYPES,
)
from partcatalog.models import Organization, Part, PartOrganizationDetail
from partcatalog.schemas.part import BulkUploadResult, OrganizationAccessIn, to_money
from partcatalog.services import override_service, scope_service

logger = logging.getLogger(__name__)

# CSV kolonu -> Part alanı (kısa/uzun güç kolon adları aynı alana gider)
COLUMN_MAP: Dict[str, str] = {
    "manufacturer_part_number": "ManufacturerPartNumber",
    "manufacturer": "Manufacturer",
    "client_part_number": "ClientPartNumber",
    "name": "Name",
    "description": "Description",
    "machine": "Machine",
    "assembly": "Assembly",
    "part_type": "PartType",
    "voltage": "Voltage",
    "shaft_size": "ShaftSize",
    "gearbox_ratio": "GearboxRatio",
    "power_rating_hp": "PowerRatingHP",
    "rating_hp": "PowerRatingHP",
    "power_rating_kw": "PowerRatingKW",
    "rating_kw": "PowerRatingKW",
    "stock_quantity": "StockQuantity",
    "estimated_lead_time_days": "LeadTimeDays",
    "price_type": "PriceType",
    "unit_price": "UnitPrice",
    "repair_price": "RepairPrice",
    "is_repairable": "IsRepairable",
}
INT_COLUMNS = {"estimated_lead_time_days", "stock_quantity"}
FLOAT_COLUMNS = {"power_rating_hp", "rating_hp", "power_rating_kw", "rating_kw"}
MONEY_COLUMNS = {"unit_price", "repair_price"}
REQUIRED_FIELDS = ("ManufacturerPartNumber", "Manufacturer", "Name", "PriceType")


@dataclass
class ParsedRow:
    line_number: int
    values: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


def template_csv() -> str:
    return "\n".join((",".join(CSV_TEMPLATE_HEADERS),) + CSV_TEMPLATE_SAMPLE_ROWS) + "\n"


def _coerce(header: str, raw: str) -> Any:
    if header == "is_repairable":
        return raw.lower() == "true"
    if header == "price_type":
        if raw not in PRICE_TYPES:
            raise RowError(f"Invalid price_type '{raw}'. Must be fixed or non_fixed")
        return raw
    if not raw:
        return None
    try:
        if header in INT_COLUMNS:
            return int(raw)
        if header in FLOAT_COLUMNS:
            return float(raw)
        if header in MONEY_COLUMNS:
            return to_money(float(raw))
    except ValueError:
        raise RowError(f"Invalid {header} '{raw}'")
    return raw


def parse_row(headers: List[str], cells: List[str], line_number: int) -> ParsedRow:
    row = ParsedRow(line_number=line_number)
    try:
        for header, cell in zip(headers, cells):
            target = COLUMN_MAP.get(header)
            if target is None:
                continue
            row.values[target] = _coerce(header, cell.strip())
    except RowError as e:
        row.error = str(e)
    return row


def parse_csv(content: str) -> List[ParsedRow]:
    """
    Başlık + en az bir veri satırı ister. Kolon sayısı tutmayan ilk satırda
    tüm dosya reddedilir (hiçbir satır işlenmeden).
    """
    # Satırlar sadece \n / \r\n ile ayrılır; hücre içindeki \x0c, \u2028 vb. metnin parçası
    reader = csv.reader(io.StringIO(content.lstrip("\ufeff").strip(), newline=""))
    records: List[Tuple[int, List[str]]] = []
    try:
        for cells in reader:
            records.append((reader.line_num, cells))
    except csv.Error as e:
        raise ValidationError(f"Row {reader.line_num}: {e}", status_code=400)
    if len(records) < 2:
        raise ValidationError("CSV must contain header and at least one data row", status_code=400)

    headers = [h.strip().lower() for h in records[0][1]]
    missing = [h for h in CSV_REQUIRED_HEADERS if h not in headers]
    if missing:
        raise ValidationError(f"Missing required headers: {', '.join(missing)}", status_code=400)

    rows: List[ParsedRow] = []
    for line_number, cells in records[1:]:
        if len(cells) != len(headers):
            raise ValidationError(
                f"Row {line_number}: Column count mismatch. Expected {len(headers)}, got {len(cells)}",
                status_code=400,
            )
        rows.append(parse_row(headers, cells, line_number))
    return rows


def _clean_application_id(application_id: Union[int, str, None]) -> Optional[int]:
    ids = scope_service.clean_application_ids([application_id])
    if application_id not in (None, "", NO_APPLICATION) and not ids:
        raise ValidationError("Invalid application for this organization", status_code=400)
    return ids[0] if ids else None


def check_target(db: Session, organization_id: int, application_id: Union[int, str, None]) -> Optional[int]:
    if not db.get(Organization, organization_id):
        raise ValidationError("Invalid organization", status_code=400)
    app_id = _clean_application_id(application_id)
    if app_id is not None and not scope_service.get_organization_application(db, organization_id, app_id):
        raise ValidationError("Invalid application for this organization", status_code=400)
    return app_id


def _insert_override(db: Session, part: Part, organization_id: int) -> PartOrganizationDetail:
    # İçe aktarılan parça kendi varsayılanlarıyla override alır
    entry = OrganizationAccessIn(
        OrganizationID=organization_id,
        OrganizationItemNumber=part.ClientPartNumber,
        UseDefaultPricing=True,
    )
    return override_service.stage_override(db, part, entry)


def commit_row(db: Session, row: ParsedRow, organization_id: int, application_id: Optional[int]) -> Part:
    if row.error:
        raise RowError(row.error)
    values = row.values
    if any(not values.get(f) for f in REQUIRED_FIELDS):
        raise RowError("Missing required fields")

    part = Part(**values)
    if part.StockQuantity is None:
        part.StockQuantity = 0
    if part.IsRepairable is None:
        part.IsRepairable = False
    try:
        db.add(part)
        db.flush()
    except SQLAlchemyError as e:
        db.rollback()
        raise RowError(str(getattr(e, "orig", e)))

    try:
        _insert_override(db, part, organization_id)
    except SQLAlchemyError as e:
        # Satır transaction'ı geri alınır: az önce eklenen Part da gider
        db.rollback()
        raise RowError(f"Organization details creation failed: {getattr(e, 'orig', e)}")

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise RowError(str(getattr(e, "orig", e)))

    if application_id is not None:
        scope_service.link_applications(db, part.PartID, organization_id, [application_id])
    return part


def import_parts(
    db: Session,
    content: str,
    *,
    organization_id: int,
    application_id: Union[int, str, None] = None,
) -> BulkUploadResult:
    app_id = check_target(db, organization_id, application_id)
    rows = parse_csv(content)

    result = BulkUploadResult()
    for row in rows:
        try:
            commit_row(db, row, organization_id, app_id)
            result.success += 1
        except RowError as e:
            result.failed += 1
            result.errors.append(f"Row {row.line_number}: {e}")

    logger.info(
        "bulk import finished (OrganizationID=%s, ApplicationID=%s): success=%s failed=%s",
        organization_id, app_id, result.success, result.failed,
    )
    return result
