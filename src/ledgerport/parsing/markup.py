"""XML exports to raw grids.

Real-world exports disagree on tag names and casing, so row discovery tries
an ordered list of strategies and takes the first that finds anything.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Callable, Optional

from ledgerport.domain import errors
from ledgerport.domain.entities import RawGrid
from ledgerport.logging_setup import get_logger

logger = get_logger(__name__)

ROW_TAGS = ("transaction", "Transaction", "record", "Record", "row", "Row")
CELL_TAG = "cell"

RowStrategy = tuple[str, Callable[[ET.Element], list[ET.Element]]]


def local_name(element: ET.Element) -> str:
    """Tag name without its ``{namespace}`` prefix."""
    tag = element.tag if isinstance(element.tag, str) else ""
    return tag.rsplit("}", 1)[-1]


def _elements_named(name: str) -> Callable[[ET.Element], list[ET.Element]]:
    def find(root: ET.Element) -> list[ET.Element]:
        return [el for el in root.iter() if local_name(el) == name]

    return find


def _root_children(root: ET.Element) -> list[ET.Element]:
    return [child for child in root if isinstance(child.tag, str)]


ROW_STRATEGIES: tuple[RowStrategy, ...] = tuple(
    (f"<{tag}> elements", _elements_named(tag)) for tag in ROW_TAGS
) + (("children of the root element", _root_children),)


def find_rows(root: ET.Element, log: Optional[logging.Logger] = None) -> list[ET.Element]:
    """Return the row elements found by the first successful strategy."""
    log = log or logger
    for description, strategy in ROW_STRATEGIES:
        rows = strategy(root)
        if rows:
            log.debug("Found %d rows using %s", len(rows), description)
            return rows
    return []


def _text(element: ET.Element) -> Optional[str]:
    text = "".join(element.itertext()).strip()
    return text or None


def row_cells(row: ET.Element) -> list[Optional[str]]:
    """Cell values of one row element.

    Explicit ``<cell>`` children win; otherwise every child element is a cell.
    """
    children = _root_children(row)
    cells = [child for child in children if local_name(child) == CELL_TAG]
    return [_text(cell) for cell in (cells or children)]


def keyed_cells(row: ET.Element, header: list[str]) -> list[Optional[str]]:
    """Cell values of a per-field row, ordered by ``header``.

    Each header name takes the next child element with that name, so a row
    that leaves out an element gets None in that column instead of shifting
    later values left. Children the header has no name for are appended after
    the header columns.
    """
    by_name: dict[str, list[ET.Element]] = {}
    for child in _root_children(row):
        by_name.setdefault(local_name(child), []).append(child)

    cells = []
    for name in header:
        found = by_name.get(name)
        cells.append(_text(found.pop(0)) if found else None)

    leftover = {id(el) for elements in by_name.values() for el in elements}
    extra = [child for child in _root_children(row) if id(child) in leftover]
    return cells + [_text(child) for child in extra]


def parse_markup(content: bytes, log: Optional[logging.Logger] = None) -> RawGrid:
    """Parse XML bytes into a grid.

    When the first row uses per-field tags (``<date>``, ``<amount>``...)
    instead of ``<cell>`` elements, a header row made of those tag names is
    placed first and every row is read by those names, so the columns can be
    mapped by name.

    Raises:
        MalformedMarkupError: If the XML is not well formed
        NoDataFoundError: If no row elements can be located
    """
    log = log or logger
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise errors.MalformedMarkupError(errors.malformed_markup(str(e))) from e

    rows = find_rows(root, log=log)
    if not rows:
        raise errors.NoDataFoundError(errors.no_rows_found("xml"))

    first_children = _root_children(rows[0])
    if first_children and not any(local_name(c) == CELL_TAG for c in first_children):
        header = [local_name(child) for child in first_children]
        log.debug("Using element names of the first row as header: %s", header)
        return [header] + [keyed_cells(row, header) for row in rows]

    return [row_cells(row) for row in rows]
