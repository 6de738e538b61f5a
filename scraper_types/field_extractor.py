# scraper_types/field_extractor.py
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence
from playwright.async_api import Error as PWError

from common.errors import ExtractionError
from schemas import MessageRecord, NumberRecord, NO_CODE

Row = Sequence[Optional[str]]

# first standalone run of 4-8 digits; ASCII so \b and \d match what the browser sees
CODE_RE = re.compile(r"\b\d{4,8}\b", re.ASCII)

# empty-state rows DataTables renders inside tbody
PLACEHOLDER_MARKERS = (
    "colspan",
    "no data available",
    "no matching records",
    "loading",
    "processing",
)

ROWS_JS = """
(selector) => Array.from(document.querySelectorAll(selector)).map(
    row => Array.from(row.querySelectorAll('td')).map(td => (td.textContent || '').trim())
)
"""


@dataclass(frozen=True)
class ColumnMap:
    """Positional contract for one view: field name -> <td> index."""
    name: str
    columns: Dict[str, int]
    required: tuple = ("phone",)
    defaults: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        indices = list(self.columns.values())
        if len(set(indices)) != len(indices):
            raise ValueError(f"{self.name}: two fields share a column index")
        if any(i < 0 for i in indices):
            raise ValueError(f"{self.name}: negative column index")
        missing = [f for f in self.required if f not in self.columns]
        if missing:
            raise ValueError(f"{self.name}: required fields without a column: {missing}")

    def cell(self, row: Row, name: str) -> str:
        """Trimmed cell text; absent or blank cells fall back to the field default."""
        idx = self.columns[name]
        value = row[idx] if idx < len(row) else None
        value = (value or "").strip()
        return value or self.defaults.get(name, "")

    def read(self, row: Row) -> Dict[str, str]:
        return {name: self.cell(row, name) for name in self.columns}

    def accepts(self, cells: Dict[str, str]) -> bool:
        """The first required field identifies the row and must be genuine; the rest must be non-blank."""
        ident, *rest = self.required
        return not is_placeholder(cells[ident]) and all(cells[f] for f in rest)


NUMBERS_COLUMNS = ColumnMap(
    name="numbers",
    columns={"range": 1, "prefix": 2, "phone": 3, "payout": 4, "client": 5},
    defaults={"client": "Unassigned"},
)

MESSAGES_COLUMNS = ColumnMap(
    name="messages",
    columns={"timestamp": 0, "range": 1, "phone": 2, "cli": 3, "client": 4, "message": 5},
    required=("phone", "message"),
)


def is_placeholder(value: str) -> bool:
    """True when a cell carries no genuine identifier (blank, empty-state text, no digits)."""
    text = (value or "").strip()
    if not text:
        return True
    lowered = text.lower()
    if any(marker in lowered for marker in PLACEHOLDER_MARKERS):
        return True
    return not any(ch.isdigit() for ch in text)


def extract_code(text: Optional[str]) -> str:
    if not text:
        return NO_CODE
    m = CODE_RE.search(text)
    return m.group(0) if m else NO_CODE


def build_number_records(rows: Sequence[Row], columns: ColumnMap = NUMBERS_COLUMNS) -> List[NumberRecord]:
    """Fields the map leaves out keep the record's own defaults."""
    records: List[NumberRecord] = []
    for row in rows:
        cells = columns.read(row)
        if not columns.accepts(cells):
            continue
        fields = {k: v for k, v in cells.items() if k in NumberRecord.model_fields}
        if "payout" in cells:
            fields["price"] = cells["payout"]
        records.append(NumberRecord(sequence_id=len(records) + 1, **fields))
    return records


def build_message_records(rows: Sequence[Row], columns: ColumnMap = MESSAGES_COLUMNS,
                          now: Optional[datetime] = None) -> List[MessageRecord]:
    """
    Message rows need both a phone and a message body. A missing timestamp
    cell is stamped with the generation time, shared by the whole batch.
    """
    generated_at = (now or datetime.now()).isoformat()
    records: List[MessageRecord] = []
    for row in rows:
        cells = columns.read(row)
        if not columns.accepts(cells) or not cells.get("message"):
            continue
        fields = {k: v for k, v in cells.items() if k in MessageRecord.model_fields}
        fields["code"] = extract_code(cells["message"])
        fields["timestamp"] = cells.get("timestamp") or generated_at
        records.append(MessageRecord(sequence_id=len(records) + 1, **fields))
    return records


async def extract_rows(page, row_selector: str) -> List[List[str]]:
    """Read every matching row's cell texts in one round trip to the page."""
    try:
        rows = await page.evaluate(ROWS_JS, row_selector)
    except PWError as e:
        raise ExtractionError(row_selector, e) from e
    return [list(r) for r in (rows or [])]


BUILDERS = {
    NUMBERS_COLUMNS.name: build_number_records,
    MESSAGES_COLUMNS.name: build_message_records,
}


async def extract_records(page, row_selector: str, column_map: ColumnMap) -> list:
    """Rows are read through `column_map`; its name picks the record type."""
    builder = BUILDERS.get(column_map.name)
    if builder is None:
        raise ValueError(f"no record type for view '{column_map.name}', expected one of {sorted(BUILDERS)}")
    rows = await extract_rows(page, row_selector)
    return builder(rows, column_map)
