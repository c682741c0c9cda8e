# production/services/preview.py

"""
REPORT PREVIEW (plain text)

Builds the daily summary foremen paste into messages:

    Report for 19 October 2026 - Jean Dupont

    PBA-12 = 40
    Total PBA: 40

    Materials used: 250kg FER-10 bars, 12sac CIM-42

    Armatures made:
    10 armatures ARM-12
    Total armatures: 10

    Personnel:
    3 welders
    Total personnel: 3

    Observations: ...
"""

from __future__ import annotations

from decimal import Decimal

from production.models import DailyReport, PersonnelLine


def _plural(label: str, count) -> str:
    return f"{label}s" if count > 1 else label


def _fmt_qty(value: Decimal) -> str:
    return format(Decimal(value).normalize(), "f")


def render_report_preview(report: DailyReport) -> str:
    author = f"{report.first_name} {report.last_name}".strip() or report.user.email
    date_label = f"{report.report_date.day} {report.report_date:%B %Y}"
    sections = [f"Report for {date_label} - {author}"]

    pba_lines = [
        line for line in report.pba_lines.select_related("product") if line.quantity > 0
    ]
    if pba_lines:
        body = [f"{line.product.code} = {line.quantity}" for line in pba_lines]
        body.append(f"Total PBA: {sum(line.quantity for line in pba_lines)}")
        sections.append("\n".join(body))

    material_lines = [
        line
        for line in report.material_lines.select_related("material")
        if line.quantity > 0
    ]
    if material_lines:
        parts = []
        for line in material_lines:
            text = f"{_fmt_qty(line.quantity)}{line.unit} {line.material.code}"
            if line.additional_info:
                text += f" {line.additional_info}"
            parts.append(text)
        sections.append("Materials used: " + ", ".join(parts))

    armature_lines = [
        line
        for line in report.armature_lines.select_related("armature")
        if line.quantity > 0
    ]
    if armature_lines:
        body = ["Armatures made:"]
        body += [
            f"{line.quantity} {_plural('armature', line.quantity)} {line.armature.code}"
            for line in armature_lines
        ]
        body.append(f"Total armatures: {sum(line.quantity for line in armature_lines)}")
        sections.append("\n".join(body))

    personnel_lines = [line for line in report.personnel_lines.all() if line.quantity > 0]
    if personnel_lines:
        labels = dict(PersonnelLine.Position.choices)
        body = ["Personnel:"]
        for line in personnel_lines:
            label = str(labels.get(line.position, line.position)).lower()
            body.append(f"{line.quantity} {_plural(label, line.quantity)}")
        body.append(f"Total personnel: {sum(line.quantity for line in personnel_lines)}")
        sections.append("\n".join(body))

    if report.observations:
        sections.append(f"Observations: {report.observations}")

    return "\n\n".join(sections)
