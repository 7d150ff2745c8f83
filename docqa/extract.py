import csv
import io
import logging
from pathlib import Path
from typing import List, Union

import docx
from openpyxl import load_workbook
from pptx import Presentation
from PyPDF2 import PdfReader

logger = logging.getLogger(__name__)

# Joins slides in the plain-text view of a presentation.
SLIDE_SEPARATOR = "\n\n"




def read_pdf(file_bytes: bytes) -> str:
    reader = PdfReader(io.BytesIO(file_bytes))
    return "\n".join(page.extract_text() or "" for page in reader.pages)




def read_docx(file_bytes: bytes) -> str:
    document = docx.Document(io.BytesIO(file_bytes))
    return "\n".join(p.text for p in document.paragraphs)




def read_pptx_slides(file_bytes: bytes) -> List[str]:
    """Text of each slide in order, text frames joined by a newline."""
    presentation = Presentation(io.BytesIO(file_bytes))
    slides = []
    for slide in presentation.slides:
        parts = [shape.text_frame.text for shape in slide.shapes if shape.has_text_frame]
        slides.append("\n".join(parts))
    return slides




def read_pptx(file_bytes: bytes) -> str:
    return SLIDE_SEPARATOR.join(read_pptx_slides(file_bytes))




def read_xlsx(file_bytes: bytes) -> str:
    """Every sheet's rows, cells joined by a space and rows by a newline."""
    workbook = load_workbook(io.BytesIO(file_bytes), read_only=True, data_only=True)
    try:
        rows = []
        for sheet in workbook.worksheets:
            for row in sheet.iter_rows(values_only=True):
                rows.append(" ".join("" if cell is None else str(cell) for cell in row))
        return "\n".join(rows)
    finally:
        workbook.close()




def read_csv(file_bytes: bytes) -> str:
    reader = csv.reader(io.StringIO(file_bytes.decode("utf-8-sig"), newline=""))
    return "\n".join(" ".join(row) for row in reader)


READERS = {
    ".pdf": read_pdf,
    ".docx": read_docx,
    ".pptx": read_pptx,
    ".xlsx": read_xlsx,
    ".csv": read_csv,
}


def is_supported(name: Union[str, Path]) -> bool:
    return Path(name).suffix.lower() in READERS


def extract_text(path: Union[str, Path]) -> str:
    """
    Extract plain text from a stored document.

    Unsupported extensions yield an empty string without reading the file.
    Read and parse errors are not caught.
    """
    path = Path(path)
    reader = READERS.get(path.suffix.lower())
    if reader is None:
        logger.debug("No reader for %s, nothing to extract", path.name)
        return ""

    text = reader(path.read_bytes())
    logger.info("Extracted %d characters from %s", len(text), path.name)
    return text
