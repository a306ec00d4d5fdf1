import re

from pydantic import BaseModel, Field


# Column order of the sheet range: A..E
COLUMNS = ("nickname", "enter_count", "last_join_time", "last_event_type", "id")

HEADER_ROWS = 1

LEADING_INT = re.compile(r"\s*[+-]?\d+")


class NicknameRecord(BaseModel):
    nickname: str
    enter_count: int = Field(0, ge=0)
    last_join_time: str = ""
    last_event_type: str = ""
    id: str = ""

    @classmethod
    def from_row(cls, row: list) -> "NicknameRecord":
        """
        Builds a record from a raw sheet row.
        The Sheets API drops trailing empty cells, so short rows are padded.
        An unparsable counter reads as 0.
        """
        cells = [str(cell) if cell is not None else "" for cell in row]
        cells += [""] * (len(COLUMNS) - len(cells))

        return cls(
            nickname=cells[0],
            enter_count=parse_count(cells[1]),
            last_join_time=cells[2],
            last_event_type=cells[3],
            id=cells[4],
        )

    def to_row(self) -> list:
        return [
            self.nickname,
            self.enter_count,
            self.last_join_time,
            self.last_event_type,
            self.id,
        ]

    def matches(self, nickname: str) -> bool:
        return self.nickname.strip() == nickname.strip()


def parse_count(value: str) -> int:
    """Leading integer of the cell, so "3.0" and "3 visits" read as 3; anything else is 0."""
    match = LEADING_INT.match(str(value))
    if match is None:
        return 0
    count = int(match.group(0))
    return count if count > 0 else 0


def row_number(position: int) -> int:
    """1-based sheet row of the `position`-th data row (0-based) below the header."""
    return position + HEADER_ROWS + 1
