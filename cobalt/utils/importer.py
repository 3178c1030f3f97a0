"""Spreadsheet import: workbook reading, column mapping, code expansion and sequential upload.

Workbooks have drifted over the years, so a header may be either the short code
used by the download template (``ghssign``) or the Korean column title
(``경고표지``). Both map onto the same canonical field.
"""
import logging
import re
from dataclasses import dataclass, field
from io import BytesIO
from typing import Awaitable, Callable, Iterable, Optional

from openpyxl import Workbook, load_workbook

log = logging.getLogger("cobalt.import")

INDUSTRIAL_SAFETY_LAW = "산업안전보건법"
CHEMICAL_CONTROL_LAW = "화학물질관리법"

GHS_DISPLAY_MAP = {
    "101": "폭발성",
    "102": "경고",
    "103": "부식성",
    "104": "급성독성",
    "105": "인화성",
    "106": "발암성/호흡기",
    "107": "수생환경유해성",
    "108": "고압가스",
    "109": "산화성",
}

PRGEAR_DISPLAY_MAP = {
    "1": "방독마스크",
    "2": "방음보호구",
    "3": "방진마스크",
    "4": "보안경",
    "5": "보호복",
    "6": "송기마스크",
    "7": "안전장갑",
    "8": "용접용보안면",
}

COLUMN_ALIASES = {
    "usage": ("purpose", "용도"),
    "area": ("area", "구역", "수령장소", "구역(수령장소)"),
    "created": ("created", "생성일"),
    "updated": ("updated", "수정일"),
    "msds_no": ("msdsno", "msds번호"),
    "name": ("name", "물질명"),
    "description": ("desc", "설명", "영문명"),
    "ghs": ("ghssign", "경고표지", "ghs경고표지"),
    "gear": ("prgear", "보호장구"),
    "ishl": ("ishl", "산업안전보건법"),
    "cmml": ("cmml", "화학물질관리법"),
    "file": ("file", "pdf파일명", "파일"),
    "laws": ("laws", "법령"),
}

TEMPLATE_COLUMNS = [
    ("purpose", 15),
    ("area", 12),
    ("created", 12),
    ("updated", 12),
    ("msdsno", 10),
    ("name", 30),
    ("desc", 40),
    ("ghssign", 15),
    ("prgear", 10),
    ("ishl", 8),
    ("cmml", 8),
    ("file", 50),
]

TEMPLATE_SAMPLE = {
    "purpose": "순수처리",
    "area": "19,20,17",
    "created": "2021-02-17",
    "updated": "2021-04-13",
    "msdsno": "M0001",
    "name": "염산 35%",
    "desc": "HYDROCHLORIC ACID 35%",
    "ghssign": "1,2,3,4",
    "prgear": "1,2,3,4",
    "ishl": "ㅇ",
    "cmml": "",
    "file": "msds/염산35_HYDROCHLORIC_ACID.pdf",
}


class WorkbookError(Exception):
    pass


def _header_key(header: str) -> str:
    return re.sub(r"\s+", "", header).lower()


HEADER_FIELDS = {
    _header_key(alias): canonical
    for canonical, aliases in COLUMN_ALIASES.items()
    for alias in aliases
}


def cell_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def split_multi(value: Optional[str]) -> list[str]:
    """Splits a comma-separated cell: "a, b ,c" -> ["a", "b", "c"]."""
    if not value:
        return []
    return [token.strip() for token in value.split(",") if token.strip()]


def parse_ghs_signs(value: Optional[str]) -> list[str]:
    # Template codes 1-9 are stored as GHS ids 101-109
    return [f"10{token}" for token in split_multi(value) if token.isdigit()]


def parse_gear(value: Optional[str]) -> list[str]:
    return [token for token in split_multi(value) if token.isdigit()]


def parse_laws(ishl: Optional[str], cmml: Optional[str], extra: Optional[str] = None) -> list[str]:
    laws = []
    if ishl and ishl.strip():
        laws.append(INDUSTRIAL_SAFETY_LAW)
    if cmml and cmml.strip():
        laws.append(CHEMICAL_CONTROL_LAW)
    for law in split_multi(extra):
        if law not in laws:
            laws.append(law)
    return laws


@dataclass
class ImportRow:
    name: str
    usage: str = ""
    pdf_file_name: str = ""
    description: str = ""
    msds_no: str = ""
    reception: list[str] = field(default_factory=list)
    laws: list[str] = field(default_factory=list)
    warning_symbols: list[str] = field(default_factory=list)
    protective_equipment: list[str] = field(default_factory=list)

    @classmethod
    def from_cells(cls, cells: dict[str, str]) -> "ImportRow":
        return cls(
            name=cells.get("name", ""),
            usage=cells.get("usage", ""),
            pdf_file_name=cells.get("file", ""),
            description=cells.get("description", ""),
            msds_no=cells.get("msds_no", ""),
            reception=split_multi(cells.get("area")),
            laws=parse_laws(cells.get("ishl"), cells.get("cmml"), cells.get("laws")),
            warning_symbols=parse_ghs_signs(cells.get("ghs")),
            protective_equipment=parse_gear(cells.get("gear")),
        )

    def payload(self) -> dict:
        return {
            "name": self.name,
            "usage": self.usage,
            "pdf_file_name": self.pdf_file_name,
            "description": self.description,
            "msds_no": self.msds_no,
            "reception": self.reception,
            "laws": self.laws,
            "warning_symbols": self.warning_symbols,
            "protective_equipment": self.protective_equipment,
        }

    def preview(self) -> dict:
        return {
            **self.payload(),
            "warning_symbol_labels": [GHS_DISPLAY_MAP.get(code, code) for code in self.warning_symbols],
            "protective_equipment_labels": [
                PRGEAR_DISPLAY_MAP.get(code, code) for code in self.protective_equipment
            ],
        }


@dataclass
class UploadResult:
    success: bool
    name: str
    error: Optional[str] = None


def map_columns(headers: Iterable) -> dict[int, str]:
    """Column index -> canonical field, for every header we recognise."""
    columns = {}
    for index, header in enumerate(headers):
        canonical = HEADER_FIELDS.get(_header_key(cell_text(header)))
        if canonical and canonical not in columns.values():
            columns[index] = canonical
    return columns


def read_workbook(content: bytes) -> list[dict[str, str]]:
    """Reads the first worksheet into one dict per non-empty row, keyed by canonical field."""
    try:
        workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
    except Exception as exc:  # openpyxl raises a mix of zipfile, KeyError and its own errors
        raise WorkbookError(f"Could not read workbook: {exc}") from exc

    try:
        worksheet = workbook.worksheets[0]
        rows = worksheet.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            return []

        columns = map_columns(header)
        records = []
        for row in rows:
            cells = [cell_text(value) for value in row]
            if not any(cells):
                continue
            records.append({
                canonical: cells[index]
                for index, canonical in columns.items()
                if index < len(cells)
            })
        return records
    finally:
        workbook.close()


def normalize_rows(records: Iterable[dict[str, str]]) -> list[ImportRow]:
    """Builds import rows, dropping any row without a substance name."""
    rows = [ImportRow.from_cells(record) for record in records]
    return [row for row in rows if row.name.strip()]


def parse_workbook(content: bytes) -> tuple[list[ImportRow], int]:
    """Returns the importable rows and the number of rows skipped for having no name."""
    records = read_workbook(content)
    if not records:
        raise WorkbookError("The workbook has no data rows")

    rows = normalize_rows(records)
    if not rows:
        raise WorkbookError("No valid rows found; check the 'name' column")

    return rows, len(records) - len(rows)


async def upload_rows(
    rows: list[ImportRow],
    create: Callable[[dict], Awaitable[object]],
    on_complete: Optional[Callable[[], Awaitable[None]]] = None,
) -> list[UploadResult]:
    """Submits rows one at a time; a failing row is recorded and the next one still runs."""
    results = []
    for row in rows:
        try:
            await create(row.payload())
        except Exception as exc:
            log.warning("Import of %r failed: %s", row.name, exc)
            results.append(UploadResult(success=False, name=row.name, error=str(exc) or type(exc).__name__))
        else:
            results.append(UploadResult(success=True, name=row.name))

    succeeded = sum(result.success for result in results)
    log.info("Imported %d of %d rows", succeeded, len(results))

    if succeeded and on_complete is not None:
        await on_complete()

    return results


def build_template() -> BytesIO:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "MSDS 데이터"

    worksheet.append([column for column, _ in TEMPLATE_COLUMNS])
    worksheet.append([TEMPLATE_SAMPLE[column] for column, _ in TEMPLATE_COLUMNS])

    for index, (_, width) in enumerate(TEMPLATE_COLUMNS, start=1):
        worksheet.column_dimensions[worksheet.cell(row=1, column=index).column_letter].width = width

    buffer = BytesIO()
    workbook.save(buffer)
    buffer.seek(0)
    return buffer
