from contextlib import contextmanager
from datetime import timezone
from typing import Iterator, List, Optional
import logging
import threading

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from string_analyzer.database import create_memory_engine
from string_analyzer.exceptions import InternalError, StringAlreadyExistsError
from string_analyzer.models.string_record import StringAnalysis
from string_analyzer.schemas.string import StringProperties, StringRecord

logger = logging.getLogger(__name__)


def _to_record(row: StringAnalysis) -> StringRecord:
    created_at = row.created_at
    if created_at.tzinfo is None:
        # SQLite hands datetimes back naive; they are always written as UTC
        created_at = created_at.replace(tzinfo=timezone.utc)

    return StringRecord(
        id=row.id,
        value=row.value,
        properties=StringProperties(
            length=row.length,
            is_palindrome=row.is_palindrome,
            unique_characters=row.unique_characters,
            word_count=row.word_count,
            sha256_hash=row.sha256_hash,
            character_frequency_map=row.character_frequency_map,
        ),
        created_at=created_at,
    )


def _to_row(record: StringRecord) -> StringAnalysis:
    props = record.properties
    return StringAnalysis(
        id=record.id,
        value=record.value,
        length=props.length,
        is_palindrome=props.is_palindrome,
        unique_characters=props.unique_characters,
        word_count=props.word_count,
        sha256_hash=props.sha256_hash,
        character_frequency_map=dict(props.character_frequency_map),
        created_at=record.created_at.astimezone(timezone.utc),
    )


class RecordStore:
    """
    Content-addressed store of analyzed strings, keyed by SHA-256 digest.

    Every operation runs under one lock, so the store can be shared by the
    request threads of a single process. Nothing survives the process.
    """

    def __init__(self, engine: Optional[Engine] = None):
        self._engine = engine or create_memory_engine()
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self._engine)
        self._lock = threading.Lock()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with self._lock:
            db = self._session_factory()
            try:
                yield db
            finally:
                db.close()

    def insert(self, record: StringRecord) -> StringRecord:
        """Store a new record; raises StringAlreadyExistsError if its digest is taken"""
        with self._session() as db:
            if db.query(StringAnalysis.position).filter(StringAnalysis.id == record.id).first():
                raise StringAlreadyExistsError()

            try:
                db.add(_to_row(record))
                db.commit()
            except IntegrityError:
                db.rollback()
                raise StringAlreadyExistsError()
            except (SQLAlchemyError, ValueError) as e:
                db.rollback()
                logger.error(f"Error storing string {record.id}: {e}")
                raise InternalError() from e

        return record

    def get(self, digest: str) -> Optional[StringRecord]:
        with self._session() as db:
            row = db.query(StringAnalysis).filter(StringAnalysis.id == digest).first()
            return _to_record(row) if row else None

    def delete(self, digest: str) -> bool:
        """Delete a record by digest; returns False when nothing was stored"""
        with self._session() as db:
            row = db.query(StringAnalysis).filter(StringAnalysis.id == digest).first()
            if not row:
                return False
            db.delete(row)
            db.commit()
            return True

    def all(self) -> List[StringRecord]:
        """Every stored record, in insertion order"""
        with self._session() as db:
            rows = db.query(StringAnalysis).order_by(StringAnalysis.position).all()
            return [_to_record(row) for row in rows]

    def count(self) -> int:
        with self._session() as db:
            return db.query(StringAnalysis).count()
