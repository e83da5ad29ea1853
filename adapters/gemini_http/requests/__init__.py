"""
Request templates for the extraction service.

Templates are Jinja2 files rendered into the prompt sent with each invoice.
"""
from pathlib import Path

# Template directory
TEMPLATE_DIR = Path(__file__).parent

TEMPLATES = {
    "invoice_extraction": "invoice_extraction.txt.j2",
}
