import asyncio
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from loguru import logger

from app.core.exceptions import InvalidInput
from app.db.models.record import NicknameRecord, row_number
from app.db.sheets_helper import SheetsHelper, SheetsSession
from app.schemas.events import EVENT_JOIN


def utc_timestamp() -> str:
    """Current UTC time as `YYYY-MM-DDTHH:MM:SS.mmmZ`."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_record_id() -> str:
    return str(uuid.uuid4())


class NicknameCounterStore:
    """
    Find-or-create of one row per nickname, with a join counter.

    Every `record_event` call reads the whole range once and writes exactly one
    row. The read-then-write is not isolated: two concurrent joins for the same
    nickname can both write `prev + 1`, and the last write wins.
    """

    def __init__(
        self,
        helper: SheetsHelper,
        clock: Callable[[], str] = utc_timestamp,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self.helper = helper
        self.clock = clock
        self.id_factory = id_factory

    async def find_record(self, nickname: str) -> Optional[Tuple[int, NicknameRecord]]:
        nickname = _require(nickname, "nickname")
        return await asyncio.to_thread(self._find_record_sync, nickname)

    async def record_event(self, nickname: str, event_type: str) -> int:
        nickname = _require(nickname, "nickname")
        if event_type is None or not str(event_type).strip():
            raise InvalidInput("'type' is required")
        event_type = str(event_type)
        return await asyncio.to_thread(self._record_event_sync, nickname, event_type)

    def _find_record_sync(self, nickname: str) -> Optional[Tuple[int, NicknameRecord]]:
        session = self.helper.connect()
        return self._scan(session, nickname)

    @staticmethod
    def _scan(session: SheetsSession, nickname: str) -> Optional[Tuple[int, NicknameRecord]]:
        for position, row in enumerate(session.read_rows()):
            record = NicknameRecord.from_row(row)
            if record.matches(nickname):
                return row_number(position), record
        return None

    def _record_event_sync(self, nickname: str, event_type: str) -> int:
        session = self.helper.connect()
        found = self._scan(session, nickname)
        joining = event_type == EVENT_JOIN
        now = self.clock() if joining else None

        if found is None:
            record = NicknameRecord(
                nickname=nickname,
                enter_count=1 if joining else 0,
                last_join_time=now or "",
                last_event_type=event_type,
                id=self.id_factory(),
            )
            session.append_row(record.to_row())
            logger.info(f"Created record for '{nickname}' ({event_type}), count={record.enter_count}")
            return record.enter_count

        row, previous = found
        record = NicknameRecord(
            nickname=nickname,
            enter_count=previous.enter_count + 1 if joining else previous.enter_count,
            last_join_time=now or previous.last_join_time,
            last_event_type=event_type,
            id=previous.id,
        )
        session.update_row(row, record.to_row())
        logger.info(f"Updated record for '{nickname}' at row {row} ({event_type}), count={record.enter_count}")
        return record.enter_count


def _require(value: Optional[str], field: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidInput(f"'{field}' is required")
    return str(value).strip()
