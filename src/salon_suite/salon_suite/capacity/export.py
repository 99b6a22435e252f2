"""CSV / Excel renderings of a capacity report."""
from __future__ import annotations

import csv
import io

import pandas as pd

from .model import CapacityReport

DAY_FIELDS = [
    "date",
    "day_name",
    "available_hours",
    "booked_hours",
    "gap_hours",
    "utilization_percent",
    "appointment_count",
    "revenue",
]


def _day_rows(report: CapacityReport) -> list[dict]:
    return [{name: getattr(day, name) for name in DAY_FIELDS} for day in report.days]


def _mix_rows(report: CapacityReport) -> list[dict]:
    return [
        {
            "category": item.category,
            "hours": item.hours,
            "appointment_count": item.appointment_count,
            "revenue": item.revenue,
            "percentage": item.percentage,
        }
        for item in report.service_mix
    ]


def report_to_csv(report: CapacityReport) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=DAY_FIELDS)
    writer.writeheader()
    for row in _day_rows(report):
        writer.writerow(row)
    # BOM so spreadsheet apps detect UTF-8.
    return out.getvalue().encode("utf-8-sig")


def report_to_xlsx(report: CapacityReport) -> io.BytesIO:
    days = pd.DataFrame(_day_rows(report), columns=DAY_FIELDS)
    mix = pd.DataFrame(_mix_rows(report), columns=["category", "hours", "appointment_count", "revenue", "percentage"])
    summary = pd.DataFrame(
        [
            {"metric": "Available hours", "value": report.total_available_hours},
            {"metric": "Booked hours", "value": report.total_booked_hours},
            {"metric": "Gap hours", "value": report.total_gap_hours},
            {"metric": "Utilization %", "value": report.overall_utilization},
            {"metric": "Revenue", "value": report.total_revenue},
            {"metric": "Avg hourly revenue", "value": report.avg_hourly_revenue},
            {"metric": "Gap revenue", "value": report.gap_revenue},
        ]
    )

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        summary.to_excel(writer, index=False, sheet_name="Summary")
        days.to_excel(writer, index=False, sheet_name="Days")
        mix.to_excel(writer, index=False, sheet_name="Service mix")
    output.seek(0)
    return output
