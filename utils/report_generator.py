"""
Generate PDF exports of productivity reports.
"""

import os
import re
from datetime import datetime
from typing import Any, Dict
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from utils.logger import get_logger

logger = get_logger("ReportGenerator")


def markdown_to_markup(line: str) -> str:
    """Escape a line of report text and turn **bold** into reportlab markup."""
    return re.sub(r"\*\*(.+?)\*\*", r"<b>\1</b>", escape(line))


class PDFReportGenerator:
    """Generate a PDF version of a productivity report."""

    def __init__(self, output_path: str, metadata: Dict[str, Any]):
        self.output_path = output_path
        self.metadata = metadata
        self.doc = SimpleDocTemplate(
            output_path,
            pagesize=letter,
            rightMargin=0.75*inch,
            leftMargin=0.75*inch,
            topMargin=0.75*inch,
            bottomMargin=0.75*inch
        )
        self.styles = getSampleStyleSheet()
        self._create_custom_styles()
        self.story = []

        logger.info(f"PDF report generator initialized: {output_path}")

    def _safe_add_style(self, style):
        """Add a paragraph style, replacing any existing one with the same name."""
        if style.name in self.styles.byName:
            self.styles.byName[style.name] = style
        else:
            self.styles.add(style)

    def _create_custom_styles(self):
        self._safe_add_style(ParagraphStyle(
            name='CustomTitle',
            parent=self.styles['Heading1'],
            fontSize=24,
            textColor=HexColor('#1a1a1a'),
            spaceAfter=30,
            alignment=TA_CENTER,
            fontName='Helvetica-Bold'
        ))

        self._safe_add_style(ParagraphStyle(
            name='SectionHeader',
            parent=self.styles['Heading2'],
            fontSize=16,
            textColor=HexColor('#2c3e50'),
            spaceAfter=12,
            spaceBefore=20,
            fontName='Helvetica-Bold'
        ))

        self._safe_add_style(ParagraphStyle(
            name='BodyText',
            parent=self.styles['Normal'],
            fontSize=10,
            alignment=TA_JUSTIFY,
            spaceAfter=8,
            leading=14
        ))

    # ---------------------------------------------------------------------
    # Cover Page
    # ---------------------------------------------------------------------
    def add_cover_page(self, stats: Dict[str, Any]):
        period = self.metadata.get("period", {})
        self.story.append(Spacer(1, 1.5*inch))
        self.story.append(Paragraph("Productivity Report", self.styles['CustomTitle']))
        self.story.append(Spacer(1, 0.5*inch))

        info_data = [
            ['Period:', f"{period.get('start_date', 'N/A')} to {period.get('end_date', 'N/A')}"],
            ['Entries:', str(self.metadata.get('entries_count', 0))],
            ['Problems Solved:', str(stats.get('total_problems_solved', 0))],
            ['Tasks Completed:', str(stats.get('total_tasks_completed', 0))],
            ['Hours Spent:', str(stats.get('total_hours_spent', 0))],
            ['Generated:', datetime.now().strftime('%Y-%m-%d %H:%M:%S')],
        ]

        info_table = Table(info_data, colWidths=[2*inch, 4*inch])
        info_table.setStyle(TableStyle([
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 11),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
        ]))

        self.story.append(info_table)
        self.story.append(PageBreak())

    # ---------------------------------------------------------------------
    # Report Body
    # ---------------------------------------------------------------------
    def add_report_text(self, report_text: str):
        self.story.append(Paragraph("Summary", self.styles['SectionHeader']))
        for line in report_text.splitlines():
            line = line.strip()
            if not line:
                continue
            if line.startswith("#"):
                self.story.append(Paragraph(markdown_to_markup(line.lstrip("# ")), self.styles['SectionHeader']))
            else:
                self.story.append(Paragraph(markdown_to_markup(line), self.styles['BodyText']))

    # ---------------------------------------------------------------------
    # Appendix
    # ---------------------------------------------------------------------
    def add_appendix(self, stats: Dict[str, Any]):
        skills = stats.get("skills_breakdown", [])
        technologies = stats.get("technologies_used", [])
        if not skills and not technologies:
            return

        self.story.append(PageBreak())
        self.story.append(Paragraph("Appendix: Skills and Technologies", self.styles['SectionHeader']))

        if skills:
            rows = [['Skill', 'Category', 'Entries']]
            rows.extend([s['name'], s.get('category') or 'Other', str(s['count'])] for s in skills)
            table = Table(rows, colWidths=[2.5*inch, 2*inch, 1*inch])
            table.setStyle(TableStyle([
                ('BACKGROUND', (0, 0), (-1, 0), HexColor('#3498db')),
                ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
                ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
                ('GRID', (0, 0), (-1, -1), 1, HexColor('#bdc3c7')),
            ]))
            self.story.append(table)
            self.story.append(Spacer(1, 0.2*inch))

        if technologies:
            self.story.append(Paragraph("<b>Technologies:</b>", self.styles['BodyText']))
            self.story.append(Paragraph(escape(", ".join(technologies)), self.styles['BodyText']))

    def generate(self, report_text: str, stats: Dict[str, Any]) -> str:
        logger.info("Generating PDF report...")
        try:
            self.add_cover_page(stats)
            self.add_report_text(report_text)
            self.add_appendix(stats)

            self.doc.build(self.story)
            logger.info(f"PDF generated at: {self.output_path}")
            return self.output_path

        except Exception as e:
            logger.error(f"Failed to generate PDF: {e}")
            raise


def export_report_pdf(
    report_text: str,
    stats: Dict[str, Any],
    metadata: Dict[str, Any],
    output_dir: str,
) -> Dict[str, str]:
    os.makedirs(output_dir, exist_ok=True)
    filename = f"report_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.pdf"
    path = os.path.join(output_dir, filename)

    PDFReportGenerator(path, metadata).generate(report_text, stats)
    return {"filename": filename, "filepath": path, "url": f"/reports/{filename}"}
