"""Rectangle templates that recognise tracked objects by their size."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)

MAX_NUM_TEMPLATES = 20
FIRST_ID = 180
ID_LIMIT = 200
NO_ID = -1

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Template:
    """A rectangle with the size bounds an object must fall within."""

    width: float
    height: float
    min_width: float
    min_height: float
    max_width: float
    max_height: float
    id: int = NO_ID
    true_id: int = 0


def _atoi(text: str | None) -> int:
    """Read the leading integer of a text, or 0 when there is none."""
    if text is None:
        return 0
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _format(value: float | int) -> str:
    if isinstance(value, int):
        return str(value)
    return format(value, "g")


class TemplateStore:
    """A bounded collection of templates kept in an XML file."""

    def __init__(self, path="templates.xml"):
        self.path = Path(path)
        self.id_counter = FIRST_ID
        self.is_loaded = False
        self.templates: list[Template] = []
        self.assigned_ids: list[int] = []

    def next_id(self) -> int:
        """Reserve the next free id, or return NO_ID once the range is used up."""
        while self.id_counter in self.assigned_ids:
            self.id_counter += 1
        if self.id_counter < ID_LIMIT:
            self.assigned_ids.append(self.id_counter)
            return self.id_counter
        return NO_ID

    def add_template(self, rect, min_rect, max_rect, scale_x=1.0, scale_y=1.0) -> None:
        """Add a template from three rectangles (objects with width and height)."""
        if len(self.templates) >= MAX_NUM_TEMPLATES:
            return
        self.templates.append(
            Template(
                width=rect.width * scale_x,
                height=rect.height * scale_y,
                min_width=min_rect.width * scale_x,
                min_height=min_rect.height * scale_y,
                max_width=max_rect.width * scale_x,
                max_height=max_rect.height * scale_y,
                id=self.next_id(),
                true_id=0,
            )
        )

    def _read_elements(self) -> list[ET.Element] | None:
        try:
            text = self.path.read_text(encoding="utf-8")
            root = ET.fromstring(f"<root>{_XML_DECLARATION.sub('', text)}</root>")
        except (OSError, ET.ParseError):
            return None
        return root.findall("TEMPLATE")

    def load(self) -> bool:
        """Load templates from the file; False when it cannot be read."""
        elements = self._read_elements()
        if elements is None:
            log.warning("%s could not be loaded", self.path)
            self.templates.clear()
            return False

        self.templates.clear()
        if elements:
            for element in elements[:MAX_NUM_TEMPLATES]:
                def value(tag: str) -> int:
                    return _atoi(element.findtext(tag))

                sizes = [
                    float(value(tag))
                    for tag in ("WIDTH", "HEIGHT", "MINWIDTH", "MINHEIGHT", "MAXWIDTH", "MAXHEIGHT")
                ]
                true_id = value("TRUEID")
                if true_id:
                    template_id = value("ID")
                    self.assigned_ids.append(template_id)
                else:
                    template_id = self.next_id()

                if all(sizes):
                    width, height, min_width, min_height, max_width, max_height = sizes
                    self.templates.append(
                        Template(
                            width=width,
                            height=height,
                            min_width=min_width,
                            min_height=min_height,
                            max_width=max_width,
                            max_height=max_height,
                            id=template_id,
                            true_id=true_id,
                        )
                    )
            self.is_loaded = True
        return True

    def save(self) -> None:
        """Write every template to the file."""
        parts = []
        for template in self.templates:
            element = ET.Element("TEMPLATE")
            for tag, value in (
                ("WIDTH", template.width),
                ("HEIGHT", template.height),
                ("MINWIDTH", template.min_width),
                ("MINHEIGHT", template.min_height),
                ("MAXWIDTH", template.max_width),
                ("MAXHEIGHT", template.max_height),
                ("TRUEID", template.true_id),
                ("ID", template.id),
            ):
                ET.SubElement(element, tag).text = _format(value)
            ET.indent(element)
            parts.append(ET.tostring(element, encoding="unicode"))
        self.path.write_text("\n".join(parts) + "\n", encoding="utf-8")
        log.info("templates saved to %s", self.path)

    def template_id(self, width, height) -> int:
        """Id of the first template whose bounds strictly hold the size, else NO_ID."""
        for template in self.templates:
            if (
                template.min_width < width < template.max_width
                and template.min_height < height < template.max_height
            ):
                return template.id
        return NO_ID