"""Load prospect records from JSON and CSV files."""

import csv
import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

from .models import BusinessType, GeoPoint, Prospect

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Accepted spellings for each field, first match wins
_FIELD_SYNONYMS: Mapping[str, Sequence[str]] = {
    "business_name": ("business_name", "businessName", "name", "facility_name", "facilityName"),
    "address": ("address", "street_address", "location"),
    "latitude": ("latitude", "lat"),
    "longitude": ("longitude", "lng", "lon"),
    "business_type": ("business_type", "businessType", "facility_type", "facilityType", "type"),
    "description": ("description", "notes", "category"),
    "last_test_date": ("last_test_date", "lastTestDate", "last_tested"),
    "estimated_devices": ("estimated_devices", "estimatedDevices", "devices", "device_count", "deviceCount"),
    "estimated_value": ("estimated_value", "estimatedValue", "value"),
    "contact_email": ("contact_email", "contactEmail", "email"),
    "contact_phone": ("contact_phone", "contactPhone", "phone"),
    "distance_miles": ("distance_miles", "distanceMiles", "distance"),
    "source": ("source",),
}


class UnsupportedFileTypeError(ValueError):
    """Raised when an unsupported file format is passed to the loader."""


class ProspectParseError(ValueError):
    """Raised when a record cannot be turned into a Prospect."""

    def __init__(self, row: int, message: str):
        self.row = row
        super().__init__(f"Row {row}: {message}")


def load_prospects(path: PathLike) -> List[Prospect]:
    """
    Load prospect records from a file.

    Supports .json (a list of records, or {"prospects": [...]}) and
    .csv / .tsv with a header row.

    Args:
        path: Path to the input file

    Returns:
        List of Prospect records in file order
    """
    path_obj = Path(path)
    suffix = path_obj.suffix.lower()

    if suffix == ".json":
        with open(path_obj, encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("prospects", [])
        if not isinstance(data, list):
            raise ProspectParseError(0, "expected a list of prospect records")
        records = data
    elif suffix in {".csv", ".tsv"}:
        delimiter = "\t" if suffix == ".tsv" else ","
        with open(path_obj, newline="", encoding="utf-8") as f:
            records = list(csv.DictReader(f, delimiter=delimiter))
    else:
        raise UnsupportedFileTypeError(f"Unsupported file extension: {path_obj.suffix}")

    prospects = []
    for i, record in enumerate(records, start=1):
        if not isinstance(record, dict):
            raise ProspectParseError(i, "record is not an object")
        if _record_is_empty(record):
            continue
        prospects.append(prospect_from_record(record, row=i))

    logger.info("Loaded %d prospects from %s", len(prospects), path_obj)
    return prospects


def prospect_from_record(record: Mapping[str, Any], row: int = 0) -> Prospect:
    """
    Build a Prospect from a loosely-keyed record.

    Nested {"coordinates": {"lat": .., "lng": ..}} is accepted as well as flat
    latitude/longitude columns.
    """
    values = {name: _pick(record, synonyms) for name, synonyms in _FIELD_SYNONYMS.items()}

    name = values["business_name"]
    if not name:
        raise ProspectParseError(row, "missing business name")

    try:
        coordinates = _parse_coordinates(record, values["latitude"], values["longitude"])
        business_type, description = _parse_business_type(values["business_type"], values["description"])

        return Prospect(
            business_name=str(name).strip(),
            address=str(values["address"] or "").strip(),
            coordinates=coordinates,
            business_type=business_type,
            description=description,
            last_test_date=_parse_date(values["last_test_date"]),
            estimated_devices=int(float(values["estimated_devices"])) if values["estimated_devices"] else 0,
            estimated_value=float(values["estimated_value"]) if values["estimated_value"] else None,
            contact_email=values["contact_email"] or None,
            contact_phone=values["contact_phone"] or None,
            distance_miles=float(values["distance_miles"]) if values["distance_miles"] else None,
            source=str(values["source"] or ""),
        )
    except (TypeError, ValueError) as e:
        raise ProspectParseError(row, str(e)) from e


def _pick(record: Mapping[str, Any], synonyms: Sequence[str]) -> Any:
    for key in synonyms:
        value = record.get(key)
        if isinstance(value, str):
            value = value.strip()
        if value not in (None, ""):
            return value
    return None


def _record_is_empty(record: Mapping[str, Any]) -> bool:
    return all(value in (None, "") or (isinstance(value, str) and not value.strip()) for value in record.values())


def _parse_coordinates(record: Mapping[str, Any], lat: Any, lng: Any) -> Optional[GeoPoint]:
    nested = record.get("coordinates")
    if isinstance(nested, dict):
        lat = nested.get("lat", nested.get("latitude", lat))
        lng = nested.get("lng", nested.get("longitude", lng))

    if lat in (None, "") or lng in (None, ""):
        return None
    return GeoPoint(float(lat), float(lng))


def _parse_business_type(raw: Any, description: Optional[str]) -> tuple:
    """
    Map a facility type to a BusinessType.

    Types outside the known set (e.g. "property_management") are kept as
    description text so keyword classification can still use them.
    """
    if not raw:
        return None, description

    text = str(raw).strip().lower()
    try:
        return BusinessType(text), description
    except ValueError:
        extra = text.replace("_", " ")
        return None, f"{description} {extra}" if description else extra


def _parse_date(value: Any) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    raise ValueError(f"unrecognised date: {text!r}")
