"""
PDF flexural calculation sheet using ReportLab.

Reproduces each ACI 318-19 formula with substituted values. Every number
printed is read from BeamInput or BeamResults; nothing is recomputed.
The standard PDF fonts carry no Greek glyphs, so all text goes through
``to_ascii`` (B1, phi, rho, et).
"""

import datetime
import io
from pathlib import Path
from typing import List, Optional, Union
from xml.sax.saxutils import escape

from pydantic import BaseModel, Field
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..design.models import BeamInput, BeamResults, SectionType, Severity
from .formatting import format_number, format_percent, to_ascii

PAGE_W, PAGE_H = letter
MARGIN = 0.75 * inch
CONTENT_W = PAGE_W - 2 * MARGIN

PRIMARY = colors.HexColor('#1e3a5f')
PASS_COLOR = colors.HexColor('#27ae60')
FAIL_COLOR = colors.HexColor('#e74c3c')

SEVERITY_COLORS = {
    Severity.ERROR: '#e74c3c',
    Severity.WARNING: '#f39c12',
    Severity.NOTE: '#2c7be5',
}

DISCLAIMER = (
    "This calculation is for preliminary design purposes only. "
    "All designs must be verified by a licensed professional engineer."
)
REFERENCE = "Reference: ACI 318-19 Building Code Requirements for Structural Concrete"


class ProjectInfo(BaseModel):
    """Export metadata printed in the sheet header."""
    project_name: str = "Untitled Project"
    project_number: str = ""
    engineer: str = ""
    date: str = Field(default_factory=lambda: datetime.date.today().isoformat())

    @property
    def file_name(self) -> str:
        """Download name: numbered when a project number is given."""
        if self.project_number:
            return f"Beam_Calc_{self.project_number}.pdf"
        return "Beam_Section_Calculation.pdf"


def _status_line(results: BeamResults) -> str:
    if results.section_type is SectionType.TENSION_CONTROLLED:
        return "SECTION IS TENSION-CONTROLLED (phi = 0.90)"
    if results.section_type is SectionType.TRANSITION:
        return f"SECTION IN TRANSITION ZONE (phi = {format_number(results.phi, 3)})"
    return "SECTION IS COMPRESSION-CONTROLLED (phi = 0.65)"


def _footer(canvas, doc):
    canvas.saveState()
    canvas.setStrokeColor(colors.gray)
    canvas.line(MARGIN, 0.75 * inch, PAGE_W - MARGIN, 0.75 * inch)
    canvas.setFont("Helvetica-Oblique", 7)
    canvas.drawString(MARGIN, 0.6 * inch, DISCLAIMER)
    canvas.setFont("Helvetica", 7)
    canvas.drawString(MARGIN, 0.45 * inch, REFERENCE)
    canvas.drawRightString(PAGE_W - MARGIN, 0.45 * inch, f"Page {doc.page}")
    canvas.restoreState()


class CalcSheetGenerator:
    """
    Generate the flexural calculation sheet for one analyzed section.

    Sections follow the hand-calculation order: header block, input data,
    stress block factor, a, c, Mn, strain compatibility, phi, reinforcement
    limits with code checks, design summary and warnings.
    """

    def __init__(self):
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Set up custom paragraph styles."""
        self.styles.add(ParagraphStyle(
            name='SheetTitle',
            parent=self.styles['Title'],
            fontSize=16,
            spaceAfter=2,
            textColor=colors.white,
        ))

        self.styles.add(ParagraphStyle(
            name='SheetSubtitle',
            parent=self.styles['Normal'],
            fontSize=10,
            alignment=1,
            textColor=colors.white,
        ))

        self.styles.add(ParagraphStyle(
            name='SectionHeader',
            parent=self.styles['Heading2'],
            fontSize=11,
            spaceBefore=12,
            spaceAfter=6,
            textColor=PRIMARY,
        ))

        self.styles.add(ParagraphStyle(
            name='WarningItem',
            parent=self.styles['BodyText'],
            fontSize=9,
            leftIndent=10,
        ))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_story(
        self,
        beam: BeamInput,
        results: BeamResults,
        project: Optional[ProjectInfo] = None,
    ) -> list:
        """Flowables of the sheet, in page order."""
        project = project or ProjectInfo()

        story = []
        story.extend(self._build_header(project))
        story.extend(self._build_input_data(beam))
        story.extend(self._build_stress_block(beam, results))
        story.extend(self._build_moment_capacity(beam, results))
        story.extend(self._build_strain_compatibility(beam, results))
        story.extend(self._build_reinforcement_limits(beam, results))
        story.extend(self._build_summary(results))
        story.extend(self._build_warnings(results))
        return story

    def generate(
        self,
        beam: BeamInput,
        results: BeamResults,
        project: Optional[ProjectInfo] = None,
    ) -> bytes:
        """
        Generate the complete PDF.

        Args:
            beam: Analyzed section
            results: Output of ``analyze_beam`` for ``beam``
            project: Header metadata (defaults to an untitled project dated today)

        Returns:
            PDF file content as bytes
        """
        project = project or ProjectInfo()
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=letter,
            rightMargin=MARGIN,
            leftMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=inch,
            title="Flexural Strength Calculation",
            author=project.engineer,
        )
        doc.build(self.build_story(beam, results, project), onFirstPage=_footer, onLaterPages=_footer)

        buffer.seek(0)
        return buffer.getvalue()

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _build_header(self, project: ProjectInfo):
        elements = []

        title = Table(
            [[Paragraph("FLEXURAL STRENGTH CALCULATION", self.styles['SheetTitle'])],
             [Paragraph("Per ACI 318-19", self.styles['SheetSubtitle'])]],
            colWidths=[CONTENT_W],
        )
        title.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, -1), PRIMARY),
            ('TOPPADDING', (0, 0), (-1, -1), 6),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ]))
        elements.append(title)
        elements.append(Spacer(1, 6))

        project_data = [
            ['Project:', to_ascii(project.project_name),
             'Project No.:', to_ascii(project.project_number) or 'N/A'],
            ['Engineer:', to_ascii(project.engineer) or 'N/A', 'Date:', project.date],
        ]
        table = Table(project_data, colWidths=[0.9 * inch, 2.85 * inch, 0.9 * inch, 2.35 * inch])
        table.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('FONTNAME', (2, 0), (2, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('BACKGROUND', (0, 0), (-1, -1), colors.HexColor('#f5f7fa')),
            ('BOX', (0, 0), (-1, -1), 0.5, colors.gray),
        ]))
        elements.append(table)

        return elements

    def _build_input_data(self, beam: BeamInput):
        elements = [self._section_header("1. INPUT DATA")]

        data = [
            ['Parameter', 'Value', 'Unit'],
            ['Width, b', f'{beam.b:g}', 'in'],
            ['Total Height, h', f'{beam.h:g}', 'in'],
            ['Effective Depth, d', f'{beam.d:g}', 'in'],
        ]
        if beam.As_prime > 0:
            data.append(["Compression Steel Depth, d'", f'{beam.d_prime:g}', 'in'])
        data.append(['Tension Steel Area, As', f'{beam.As:g}', 'sq.in.'])
        if beam.As_prime > 0:
            data.append(["Compression Steel Area, A's", f'{beam.As_prime:g}', 'sq.in.'])
        data += [
            ["Concrete Strength, f'c", f'{beam.fc:,.0f}', 'psi'],
            ['Steel Yield Strength, fy', f'{beam.fy:,.0f}', 'psi'],
            ['Steel Modulus, Es', f'{beam.Es / 1e6:.0f} x 10^6', 'psi'],
        ]
        elements.append(self._data_table(data))

        return elements

    def _build_stress_block(self, beam: BeamInput, results: BeamResults):
        fy = f"{beam.fy:,.0f}"
        elements = [self._section_header("2. STRESS BLOCK FACTOR", "ACI 318-19 Sec. 22.2.2.4.3")]

        if beam.fc <= 4000:
            rule = ["For f'c <= 4000 psi:", "B1 = 0.85"]
        else:
            rule = ["For f'c > 4000 psi:",
                    "B1 = 0.85 - 0.05 x (f'c - 4000) / 1000, but not less than 0.65"]
        elements.append(self._formula_box(rule, f"B1 = {format_number(results.beta1, 3)}"))

        elements.append(self._section_header("3. STRESS BLOCK DEPTH", "ACI 318-19 Sec. 22.2.2.4.1"))
        elements.append(self._formula_box(
            ["a = As x fy / (0.85 x f'c x b)",
             f"a = {beam.As:g} x {fy} / (0.85 x {beam.fc:,.0f} x {beam.b:g})"],
            f"a = {format_number(results.a, 3)} in",
        ))

        elements.append(self._section_header("4. NEUTRAL AXIS DEPTH", "ACI 318-19 Sec. 22.2.2.4.1"))
        elements.append(self._formula_box(
            ["c = a / B1",
             f"c = {format_number(results.a, 3)} / {format_number(results.beta1, 3)}"],
            f"c = {format_number(results.c, 3)} in",
        ))

        return elements

    def _build_moment_capacity(self, beam: BeamInput, results: BeamResults):
        elements = [self._section_header("5. NOMINAL MOMENT CAPACITY", "ACI 318-19 Sec. 22.3")]
        elements.append(self._formula_box(
            ["Mn = As x fy x (d - a/2)",
             f"Mn = {beam.As:g} x {beam.fy:,.0f} x ({beam.d:g} - {format_number(results.a, 3)}/2)",
             f"Mn = {format_number(results.Mn, 0)} lb-in"],
            f"Mn = {format_number(results.Mn_kip_ft, 1)} kip-ft",
        ))
        return elements

    def _build_strain_compatibility(self, beam: BeamInput, results: BeamResults):
        c = format_number(results.c, 3)
        elements = [self._section_header("6. STRAIN COMPATIBILITY")]
        elements.append(self._formula_box(
            ["et = ecu x (d - c) / c",
             f"et = {format_number(results.epsilon_cu, 3)} x ({beam.d:g} - {c}) / {c}",
             f"ey = fy / Es = {beam.fy:,.0f} / {beam.Es / 1e6:.0f} x 10^6 = {format_number(results.epsilon_y, 5)}"],
            f"et = {format_number(results.epsilon_t, 5)}",
        ))

        elements.append(self._section_header("7. STRENGTH REDUCTION FACTOR", "ACI 318-19 Table 21.2.2"))
        elements.append(self._formula_box(
            ["et >= 0.005: tension-controlled, phi = 0.90",
             "et <= ey: compression-controlled, phi = 0.65",
             "ey < et < 0.005: transition, phi = 0.65 + 0.25(et - ey)/(0.005 - ey)",
             f"Classification: {results.section_type.value}",
             f"phi x Mn = {format_number(results.phi, 3)} x {format_number(results.Mn_kip_ft, 1)} kip-ft"],
            f"phi x Mn = {format_number(results.phiMn_kip_ft, 1)} kip-ft",
        ))

        return elements

    def _build_reinforcement_limits(self, beam: BeamInput, results: BeamResults):
        elements = [self._section_header("8. REINFORCEMENT LIMITS", "ACI 318-19 Sec. 9.6.1.2, 9.3.3.1")]

        elements.append(self._data_table([
            ['Ratio', 'Expression', 'Value'],
            ['rho_min', "max(3 x sqrt(f'c) / fy, 200 / fy)", format_percent(results.rho_min)],
            ['rho_max', "(0.85 x B1 x f'c / fy) x (ecu / (ecu + 0.004))", format_percent(results.rho_max)],
            ['rho_b', "(0.85 x B1 x f'c / fy) x (ecu / (ecu + ey))", format_percent(results.rho_b)],
            ['rho', f"As / (b x d) = {beam.As:g} / ({beam.b:g} x {beam.d:g})", format_percent(results.rho)],
        ], col_widths=[1.0 * inch, 4.5 * inch, 1.5 * inch]))
        elements.append(Spacer(1, 8))

        rho = format_percent(results.rho)
        elements.append(self._check_table([
            ['Check', 'Condition', 'Status'],
            ['Minimum Reinforcement',
             f"rho >= rho_min: {rho} >= {format_percent(results.rho_min)}",
             'PASS' if results.is_adequately_reinforced else 'FAIL'],
            ['Maximum Reinforcement',
             f"rho <= rho_max: {rho} <= {format_percent(results.rho_max)}",
             'PASS' if results.is_not_over_reinforced else 'FAIL'],
            ['Steel Yielding',
             f"et >= ey: {format_number(results.epsilon_t, 5)} >= {format_number(results.epsilon_y, 5)}",
             'PASS' if results.steel_yields else 'FAIL'],
        ]))

        return elements

    def _build_summary(self, results: BeamResults):
        elements = [self._section_header("DESIGN SUMMARY")]

        all_passed = results.is_adequately_reinforced and results.is_not_over_reinforced and results.steel_yields
        verdict = "ALL CODE CHECKS PASSED" if all_passed else "REVIEW REQUIRED - SEE CHECKS ABOVE"

        table = Table([
            ['DESIGN MOMENT CAPACITY', _status_line(results)],
            [f"phi x Mn = {format_number(results.phiMn_kip_ft, 1)} kip-ft", verdict],
            [f"({format_number(results.phiMn / 1000, 1)} kip-in)", ''],
        ], colWidths=[CONTENT_W / 2, CONTENT_W / 2])
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, -1), colors.HexColor('#eef3f9')),
            ('BOX', (0, 0), (-1, -1), 1.5, PRIMARY),
            ('FONTNAME', (0, 0), (0, 1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 1), (0, 1), 14),
            ('LEADING', (0, 1), (0, 1), 17),
            ('FONTSIZE', (0, 0), (0, 0), 10),
            ('FONTSIZE', (0, 2), (-1, 2), 9),
            ('FONTNAME', (1, 0), (1, 1), 'Helvetica-Bold'),
            ('FONTSIZE', (1, 0), (1, 1), 9),
            ('ALIGN', (1, 0), (1, -1), 'RIGHT'),
            ('TEXTCOLOR', (1, 1), (1, 1), PASS_COLOR if all_passed else FAIL_COLOR),
            ('TOPPADDING', (0, 0), (-1, -1), 6),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ]))
        elements.append(table)

        return elements

    def _build_warnings(self, results: BeamResults):
        if not results.warnings:
            return []

        elements = [self._section_header("Warnings:")]
        for warning in results.warnings:
            elements.append(Paragraph(
                f'<font color="{SEVERITY_COLORS[warning.severity]}">- {escape(to_ascii(warning.text))}</font>',
                self.styles['WarningItem'],
            ))
        return elements

    # ------------------------------------------------------------------
    # Building blocks
    # ------------------------------------------------------------------

    def _section_header(self, title: str, reference: Optional[str] = None):
        if reference:
            title = f'{title} <font size="8" color="#7f8c8d">({reference})</font>'
        return Paragraph(title, self.styles['SectionHeader'])

    def _formula_box(self, lines: List[str], result: str):
        """Shaded box with the formula lines on the left and the result on the right."""
        rows = [[line, ''] for line in lines]
        rows[-1][1] = result
        table = Table(rows, colWidths=[CONTENT_W - 1.9 * inch, 1.9 * inch])
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, -1), colors.HexColor('#f8f9fa')),
            ('BOX', (0, 0), (-1, -1), 0.5, colors.HexColor('#bdc3c7')),
            ('FONTNAME', (0, 0), (0, -1), 'Courier'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('FONTNAME', (1, -1), (1, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (1, -1), (1, -1), 10),
            ('ALIGN', (1, 0), (1, -1), 'RIGHT'),
            ('LEFTPADDING', (0, 0), (0, -1), 12),
        ]))
        return table

    def _data_table(self, data, col_widths=None):
        """Create a formatted data table."""
        table = Table(data, colWidths=col_widths or [3.5 * inch, 2.0 * inch, 1.5 * inch])
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), PRIMARY),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('ALIGN', (1, 0), (-1, -1), 'CENTER'),
            ('ALIGN', (0, 0), (0, -1), 'LEFT'),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.gray),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f8f9fa')]),
        ]))
        return table

    def _check_table(self, data):
        """Create a check status table with PASS/FAIL color coding."""
        table = Table(data, colWidths=[2.0 * inch, 4.0 * inch, 1.0 * inch])
        style = [
            ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#34495e')),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('ALIGN', (-1, 0), (-1, -1), 'CENTER'),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.gray),
        ]

        for i, row in enumerate(data[1:], 1):
            color = PASS_COLOR if row[-1] == 'PASS' else FAIL_COLOR
            style.append(('TEXTCOLOR', (-1, i), (-1, i), color))
            style.append(('FONTNAME', (-1, i), (-1, i), 'Helvetica-Bold'))

        table.setStyle(TableStyle(style))
        return table


def render_calc_sheet(
    beam: BeamInput,
    results: BeamResults,
    project: Optional[ProjectInfo] = None,
) -> bytes:
    """Render the calculation sheet as PDF bytes."""
    return CalcSheetGenerator().generate(beam, results, project)


def export_calc_sheet(
    path: Union[str, Path],
    beam: BeamInput,
    results: BeamResults,
    project: Optional[ProjectInfo] = None,
) -> bytes:
    """Write the calculation sheet PDF to ``path`` and return its bytes."""
    pdf = render_calc_sheet(beam, results, project)
    Path(path).write_bytes(pdf)
    return pdf
