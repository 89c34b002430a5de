"""Export functionality for scored prospects (CSV, JSON)."""

import csv
import io
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .models import ScoredProspect

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "id",
    "business_name",
    "address",
    "business_type",
    "score",
    "temperature",
    "distance_miles",
    "last_test_date",
    "estimated_devices",
    "estimated_value",
    "contact_email",
    "contact_phone",
    "next_action",
    "source",
    "generated_at",
]

BREAKDOWN_COLUMNS = [
    "compliance_points",
    "business_type_points",
    "distance_points",
    "revenue_points",
    "contact_points",
]


def _csv_row(scored: ScoredProspect) -> dict:
    p = scored.prospect
    b = scored.breakdown
    return {
        "id": scored.id,
        "business_name": p.business_name,
        "address": p.address or "",
        "business_type": scored.business_type.value,
        "score": scored.score,
        "temperature": scored.temperature.value,
        "distance_miles": round(p.distance_miles, 2) if p.distance_miles is not None else "",
        "last_test_date": p.last_test_date.isoformat() if p.last_test_date else "",
        "estimated_devices": p.estimated_devices,
        "estimated_value": p.estimated_value if p.estimated_value is not None else "",
        "contact_email": p.contact_email or "",
        "contact_phone": p.contact_phone or "",
        "next_action": scored.next_action,
        "source": p.source,
        "generated_at": scored.generated_at.isoformat(),
        "compliance_points": b.compliance,
        "business_type_points": b.business_type,
        "distance_points": b.distance,
        "revenue_points": b.revenue,
        "contact_points": b.contact,
    }


def export_to_csv(
    prospects: list[ScoredProspect],
    output_path: str,
    include_breakdown: bool = True,
    delimiter: str = ",",
) -> str:
    """
    Export scored prospects to CSV file.

    Args:
        prospects: List of scored prospects to export
        output_path: Path to output file
        include_breakdown: Whether to include per-factor point columns
        delimiter: Field delimiter ("," or tab)

    Returns:
        Path to the created file
    """
    columns = CSV_COLUMNS + BREAKDOWN_COLUMNS if include_breakdown else CSV_COLUMNS

    # Create output directory if needed
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns, delimiter=delimiter, extrasaction="ignore")
        writer.writeheader()
        for scored in prospects:
            writer.writerow(_csv_row(scored))

    logger.info("Exported %d prospects to %s", len(prospects), output_path)
    return str(output_path)


def export_to_json(
    prospects: list[ScoredProspect],
    output_path: str,
    pretty: bool = True,
    metrics: Optional[dict] = None,
) -> str:
    """
    Export scored prospects to JSON file.

    Args:
        prospects: List of scored prospects to export
        output_path: Path to output file
        pretty: Whether to format JSON with indentation
        metrics: Optional run summary to include

    Returns:
        Path to the created file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "exported_at": datetime.now().isoformat(),
        "total_prospects": len(prospects),
        "prospects": [p.to_dict() for p in prospects],
    }
    if metrics is not None:
        data["metrics"] = metrics

    with open(output_path, "w", encoding="utf-8") as f:
        if pretty:
            json.dump(data, f, indent=2, default=str)
        else:
            json.dump(data, f, default=str)

    logger.info("Exported %d prospects to %s", len(prospects), output_path)
    return str(output_path)


def export_to_jsonl(prospects: list[ScoredProspect], output_path: str) -> str:
    """Export scored prospects as one JSON object per line."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        for scored in prospects:
            f.write(json.dumps(scored.to_dict(), default=str) + "\n")

    logger.info("Exported %d prospects to %s", len(prospects), output_path)
    return str(output_path)


def export_prospects(
    prospects: list[ScoredProspect],
    output_path: str,
    format: str = "csv",
) -> str:
    """
    Export scored prospects to file in specified format.

    Args:
        prospects: List of scored prospects to export
        output_path: Path to output file
        format: Output format ("csv", "tsv", "json" or "jsonl")

    Returns:
        Path to the created file
    """
    format = format.lower()
    if format == "json":
        return export_to_json(prospects, output_path)
    elif format == "jsonl":
        return export_to_jsonl(prospects, output_path)
    elif format == "tsv":
        return export_to_csv(prospects, output_path, delimiter="\t")
    else:
        return export_to_csv(prospects, output_path)


def export_csv_string(prospects: list[ScoredProspect], delimiter: str = ",", headers: bool = True) -> str:
    """
    Export scored prospects to a CSV string (for stdout or web download).

    Args:
        prospects: List of scored prospects to export
        delimiter: Field delimiter ("," or tab)
        headers: Whether to emit the header row

    Returns:
        CSV content as string
    """
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=CSV_COLUMNS, delimiter=delimiter, extrasaction="ignore")

    if headers:
        writer.writeheader()

    for scored in prospects:
        writer.writerow(_csv_row(scored))

    return output.getvalue()
