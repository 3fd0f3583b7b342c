"""
PDF report: a text page followed by its figure page, for each section.
"""

import os

from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, PageBreak, Image as RLImage


def _escape(line):
    # reportlab paragraphs are XML
    return line.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')


def build_pdf(sections, path, title="Omitted Variable Bias in OLS"):
    """
    Combine text blocks and PNG figures into a PDF.

    Parameters
    ----------
    sections : list of (str, str or None)
        (section_text, figure_path). The first line of the text is used as
        the section title; a None figure skips the figure page.
    path : str
        Output PDF path.
    title : str
        Cover title.

    Returns
    -------
    str
        `path`.
    """
    doc = SimpleDocTemplate(path, pagesize=letter,
                            leftMargin=0.75*inch, rightMargin=0.75*inch,
                            topMargin=0.75*inch, bottomMargin=0.75*inch)

    styles = getSampleStyleSheet()
    # Monospace so that printed tables keep their alignment
    code_style = ParagraphStyle(
        'CodeBlock',
        parent=styles['Normal'],
        fontName='Courier',
        fontSize=7.5,
        leading=9.5,
        spaceAfter=2,
    )
    title_style = ParagraphStyle(
        'SectionTitle',
        parent=styles['Heading1'],
        fontName='Helvetica-Bold',
        fontSize=14,
        leading=18,
        spaceAfter=12,
        textColor='#2171B5',
    )

    story = [Paragraph(_escape(title), styles['Title']), Spacer(1, 12)]
    page_w = letter[0] - 1.5*inch
    max_h = letter[1] - 1.5*inch

    for sec_text, fig_path in sections:
        lines = sec_text.strip().split('\n')
        story.append(Paragraph(_escape(lines[0]), title_style))
        for line in lines[1:]:
            if line.strip() == '':
                story.append(Spacer(1, 6))
            else:
                # keep leading/inner runs of spaces in the monospace block
                story.append(Paragraph(_escape(line).replace(' ', '&nbsp;'), code_style))
        story.append(PageBreak())

        if fig_path is None or not os.path.exists(fig_path):
            continue
        with Image.open(fig_path) as img:
            iw, ih = img.size
        aspect = ih / iw
        display_w = page_w
        display_h = display_w * aspect
        if display_h > max_h:
            display_h = max_h
            display_w = display_h / aspect
        story.append(RLImage(fig_path, width=display_w, height=display_h))
        story.append(PageBreak())

    doc.build(story)
    return path
