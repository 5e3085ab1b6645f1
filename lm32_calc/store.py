import logging
from typing import Any, List, MutableMapping

from pydantic import TypeAdapter, ValidationError

from lm32_calc.models import ExamRecord

logger = logging.getLogger(__name__)

DEFAULT_KEY = "exams"

_RAW_ENTRIES = TypeAdapter(List[Any])
_RECORDS = TypeAdapter(List[ExamRecord])


class RecordStore:
    """
    Exam list kept as JSON under one key of a key-value slot.

    The slot is anything dict-like; the Streamlit app passes st.session_state.
    A missing or corrupt slot loads as an empty list.
    """

    def __init__(self, slot: MutableMapping, key: str = DEFAULT_KEY):
        self.slot = slot
        self.key = key

    def load(self) -> List[ExamRecord]:
        raw = self.slot.get(self.key)
        if not raw:
            return []
        if not isinstance(raw, (str, bytes)):
            logger.error("Saved exams under %r are not JSON text, ignoring them", self.key)
            return []

        try:
            entries = _RAW_ENTRIES.validate_json(raw)
        except ValidationError as e:
            logger.error("Error parsing saved exams under %r: %s", self.key, e)
            return []

        records = []
        for entry in entries:
            try:
                records.append(ExamRecord.model_validate(entry))
            except ValidationError as e:
                logger.warning("Skipping invalid saved exam %r: %s", entry, e)
        return records

    def save(self, records: List[ExamRecord]) -> None:
        try:
            self.slot[self.key] = _RECORDS.dump_json(records, by_alias=True).decode()
        except Exception:
            logger.exception("Could not save %d exams under %r", len(records), self.key)

    def add(self, record: ExamRecord) -> List[ExamRecord]:
        records = self.load() + [record]
        self.save(records)
        return records

    def remove(self, identifier: str) -> List[ExamRecord]:
        records = [record for record in self.load() if record.identifier != identifier]
        self.save(records)
        return records
