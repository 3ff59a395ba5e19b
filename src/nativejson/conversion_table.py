"""Tab-separated conversion tables used to pin encoder/decoder behavior.

Each non-blank line that does not start with `#` holds two or three columns:

    <python literal> TAB <json text> [TAB <flags>]

The python literal is read with `ast.literal_eval` (`1e999` spells infinity).
The json column is either a JSON document or `!<failure kind>`, meaning the
encoder must fail with that kind. Flags are comma or space separated:
`skip_to` skips the encode check and `skip_from` skips the decode check.
Expected-failure rows never run the decode check.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
import json
import logging
from pathlib import Path

from nativejson.config import EncoderConfig
from nativejson.decoder import decode
from nativejson.encoder import encode
from nativejson.errors import FailureKind, to_host_error
from nativejson.host import PYTHON_HOST, HostContext
from nativejson.invariants import never
from nativejson.json_value import JsonValue, json_kind
from nativejson.result import Err, Ok
from nativejson.schema import RowCheckDTO, TableReportDTO
from nativejson.text_io import parse_json_text, render_json_text

logger = logging.getLogger(__name__)

SKIP_TO_FLAG = "skip_to"
SKIP_FROM_FLAG = "skip_from"
_EXPECTED_FAILURE_PREFIX = "!"


@dataclass(frozen=True)
class TableRow:
    line: int
    native_source: str
    json_source: str
    native: object
    expected: JsonValue | None
    expected_failure: FailureKind | None
    flags: frozenset[str] = frozenset()

    @property
    def checks_to_json(self) -> bool:
        return SKIP_TO_FLAG not in self.flags

    @property
    def checks_from_json(self) -> bool:
        return self.expected_failure is None and SKIP_FROM_FLAG not in self.flags


def _split_flags(text: str) -> frozenset[str]:
    return frozenset(part for part in text.replace(",", " ").split() if part)


def _parse_native(source: str, *, line: int) -> object:
    try:
        return ast.literal_eval(source)
    except (ValueError, SyntaxError, TypeError):
        never("invalid python literal in conversion table", line=line, source=source)


def _parse_expected(source: str, *, line: int) -> tuple[JsonValue | None, FailureKind | None]:
    if source.startswith(_EXPECTED_FAILURE_PREFIX):
        kind_text = source[len(_EXPECTED_FAILURE_PREFIX):].strip()
        try:
            return None, FailureKind(kind_text)
        except ValueError:
            never("unknown failure kind in conversion table", line=line, kind=kind_text)
    try:
        return parse_json_text(source), None
    except (ValueError, TypeError):
        never("invalid json in conversion table", line=line, source=source)


def parse_table(text: str) -> list[TableRow]:
    rows: list[TableRow] = []
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        if not raw_line.strip() or raw_line.startswith("#"):
            continue
        columns = raw_line.split("\t")
        if len(columns) == 2:
            columns.append("")
        if len(columns) != 3:
            never(
                "conversion table rows need 2 or 3 tab-separated columns",
                line=line_number,
                columns=len(columns),
            )
        native_source, json_source, flag_text = columns
        expected, expected_failure = _parse_expected(json_source, line=line_number)
        rows.append(
            TableRow(
                line=line_number,
                native_source=native_source,
                json_source=json_source,
                native=_parse_native(native_source, line=line_number),
                expected=expected,
                expected_failure=expected_failure,
                flags=_split_flags(flag_text),
            )
        )
    return rows


def _check_to_json(
    row: TableRow,
    *,
    host: HostContext,
    config: EncoderConfig | None,
) -> RowCheckDTO:
    result = encode(row.native, host=host, config=config)
    match result:
        case Ok(value=encoded):
            actual = render_json_text(encoded)
            ok = row.expected_failure is None and encoded == row.expected
            message = None
            if not ok and row.expected_failure is not None:
                message = f"expected failure {row.expected_failure.value}, got {json_kind(encoded)}"
            elif not ok:
                message = f"expected {row.json_source}, got {actual}"
            return RowCheckDTO(
                line=row.line,
                source=row.native_source,
                direction="to_json",
                ok=ok,
                expected=row.json_source,
                actual=actual,
                message=message,
            )
        case Err(error=failure):
            ok = failure.kind is row.expected_failure
            return RowCheckDTO(
                line=row.line,
                source=row.native_source,
                direction="to_json",
                ok=ok,
                expected=row.json_source,
                failure_kind=failure.kind.value,
                message=str(to_host_error(failure, host)),
            )
        case _:
            never("encode() returned neither Ok nor Err", result_type=type(result).__name__)


def _check_from_json(row: TableRow, *, host: HostContext) -> RowCheckDTO:
    if row.expected is None:
        never("decode check requires an expected json value", line=row.line)
    result = decode(row.expected, host=host)
    match result:
        case Ok(value=native):
            ok = bool(native == row.native)
            return RowCheckDTO(
                line=row.line,
                source=row.native_source,
                direction="from_json",
                ok=ok,
                expected=row.native_source,
                actual=repr(native),
                message=None if ok else "decoded value differs from the literal",
            )
        case Err(error=failure):
            return RowCheckDTO(
                line=row.line,
                source=row.native_source,
                direction="from_json",
                ok=False,
                expected=row.native_source,
                failure_kind=failure.kind.value,
                message=str(to_host_error(failure, host)),
            )
        case _:
            never("decode() returned neither Ok nor Err", result_type=type(result).__name__)


def check_row(
    row: TableRow,
    *,
    host: HostContext = PYTHON_HOST,
    config: EncoderConfig | None = None,
) -> list[RowCheckDTO]:
    checks: list[RowCheckDTO] = []
    if row.checks_to_json:
        checks.append(_check_to_json(row, host=host, config=config))
    if row.checks_from_json:
        checks.append(_check_from_json(row, host=host))
    return checks


def check_table(
    text: str,
    *,
    host: HostContext = PYTHON_HOST,
    config: EncoderConfig | None = None,
) -> TableReportDTO:
    rows = parse_table(text)
    checks: list[RowCheckDTO] = []
    for row in rows:
        checks.extend(check_row(row, host=host, config=config))
    report = TableReportDTO(rows_read=len(rows), checks_run=len(checks), checks=checks)
    for failure in report.failures:
        logger.info(
            "conversion table mismatch at line %d (%s): %s",
            failure.line,
            failure.direction,
            failure.message,
        )
    return report


def check_table_path(
    path: Path,
    *,
    host: HostContext = PYTHON_HOST,
    config: EncoderConfig | None = None,
) -> TableReportDTO:
    return check_table(path.read_text(encoding="utf-8"), host=host, config=config)


def report_json(report: TableReportDTO) -> str:
    return json.dumps(report.model_dump(), indent=2, sort_keys=True)
