from pathlib import Path
from typing import Any, Mapping

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .pricing.offer.formatting import format_sek, format_thousands

# Structure:
# fonsterkalkyl/
#   templates.py  (this file)
#   text_templates/
#     offer.txt.j2

TEMPLATES_DIR = Path(__file__).resolve().parent / "text_templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["sek"] = format_sek
_env.filters["thousands"] = format_thousands


def render_template(name: str, context: Mapping[str, Any]) -> str:
    """
    Render a Jinja2 template to a string.

    Example:
        text = render_template("offer.txt.j2", {"customer": customer, ...})
    """
    template = _env.get_template(name)
    return template.render(**context)
