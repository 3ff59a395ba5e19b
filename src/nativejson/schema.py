from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel

Direction = Literal["to_json", "from_json"]


class RowCheckDTO(BaseModel):
    line: int
    source: str
    direction: Direction
    ok: bool
    expected: str
    actual: Optional[str] = None
    failure_kind: Optional[str] = None
    message: Optional[str] = None


class TableReportDTO(BaseModel):
    rows_read: int
    checks_run: int
    checks: List[RowCheckDTO] = []

    @property
    def failures(self) -> List[RowCheckDTO]:
        return [check for check in self.checks if not check.ok]

    @property
    def ok(self) -> bool:
        return not self.failures
