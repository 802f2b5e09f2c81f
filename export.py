"""
Excel export of distribution reports.
"""
import os
from typing import List

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from models import DistributionReport
from utils.logger import logger


def _style_header(ws: Worksheet) -> None:
    header_fill = PatternFill(start_color="D0D0D0", end_color="D0D0D0", fill_type="solid")
    header_font = Font(bold=True)
    center_align = Alignment(horizontal="center")

    for cell in ws[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = center_align


def _fit_columns(sheets: List[Worksheet]) -> None:
    for sheet in sheets:
        for col in sheet.columns:
            max_len = max((len(str(c.value)) for c in col if c.value is not None), default=0)
            sheet.column_dimensions[get_column_letter(col[0].column)].width = max_len + 2


def export_report_to_excel(report: DistributionReport, filename: str) -> bool:
    """
    Export a distribution report to Excel.

    Args:
        report: Report to export
        filename: File to save the spreadsheet

    Returns:
        bool: True if export successful
    """
    wb = Workbook()

    # Members sheet
    ws1 = wb.active
    ws1.title = "Members"
    ws1.append([
        "Member",
        "Specialties",
        "Capacity",
        "Assigned",
        "Available",
        "Utilization %",
        "High",
        "Medium",
        "Low",
        "Avg Premium",
        "Total Premium",
    ])
    _style_header(ws1)

    for stat in report.members.values():
        ws1.append([
            stat.name,
            ",".join(sorted(stat.specialties)),
            stat.capacity,
            stat.assigned,
            stat.available,
            round(stat.utilization_percent, 1),
            stat.tasks.high,
            stat.tasks.medium,
            stat.tasks.low,
            round(stat.avg_premium, 2),
            round(stat.total_premium, 2),
        ])

    # Redistributions sheet
    ws2 = wb.create_sheet("Redistributions")
    ws2.append(["TaskID", "From", "To", "Reason"])
    _style_header(ws2)

    for move in report.redistribution_suggestions:
        ws2.append([move.task_id, move.from_member, move.to_member, move.reason])

    # Recommendations sheet
    ws3 = wb.create_sheet("Recommendations")
    ws3.append(["Type", "Member", "Priority", "Message"])
    _style_header(ws3)

    for rec in report.recommendations:
        ws3.append([rec.type, rec.member, rec.priority, rec.message])

    # Summary sheet
    ws4 = wb.create_sheet("Summary")
    ws4.append(["Metric", "Value"])
    _style_header(ws4)

    summary = report.team_summary
    ws4.append(["Generated", report.timestamp.strftime("%Y-%m-%d %H:%M:%S")])
    ws4.append(["Strategy", report.strategy])
    ws4.append(["Open Tasks", summary.total_tasks])
    ws4.append(["Average Utilization", f"{summary.average_utilization:.1f}%"])
    ws4.append(["Balance Score", round(summary.balance_score, 1)])
    ws4.append(["Suggested Moves", len(report.redistribution_suggestions)])

    _fit_columns(wb.worksheets)

    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)

    try:
        wb.save(filename)
        logger.info(f"Excel report saved as '{filename}'")
        return True
    except OSError as e:
        logger.error(f"Error saving Excel report: {e}")
        return False
