# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: SqlEmbeddingRecordStore
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional

from sqlalchemy import Column, DateTime, Index, Integer, String, create_engine, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

import settings
from matching.EmbeddingRecord import EmbeddingRecord
from matching.MatchingEnums import DocumentType, EmbeddingStatus
from matching.MatchingErrors import DuplicateRecordError, NotFoundError
from records.EmbeddingRecordStore import EmbeddingRecordStore
from utility.logging_utils import get_class_logger

Base = declarative_base()

ERROR_MESSAGE_MAX = 2000


class EmbeddingRecordRow(Base):
    __tablename__ = "embedding_records"

    id = Column(String(36), primary_key=True)
    document_id = Column(String(64), nullable=False)
    document_type = Column(String(32), nullable=False)  # Job | CandidateProfile
    status = Column(String(16), nullable=False)
    error_message = Column(String(ERROR_MESSAGE_MAX), nullable=True)
    retry_count = Column(Integer, nullable=False, default=0)
    last_indexed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_embedding_records_document", "document_id", "document_type", unique=True),
        Index("ix_embedding_records_status", "status"),
        Index("ix_embedding_records_updated_at", "updated_at"),
    )


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes even for timezone=True columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_record(row: EmbeddingRecordRow) -> EmbeddingRecord:
    return EmbeddingRecord(
        id=row.id,
        document_id=row.document_id,
        document_type=DocumentType(row.document_type),
        status=EmbeddingStatus(row.status),
        retry_count=row.retry_count,
        last_indexed_at=_aware(row.last_indexed_at),
        error_message=row.error_message,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def _copy_onto(row: EmbeddingRecordRow, record: EmbeddingRecord) -> None:
    row.status = record.status.value
    row.error_message = record.error_message[:ERROR_MESSAGE_MAX] if record.error_message else None
    row.retry_count = record.retry_count
    row.last_indexed_at = record.last_indexed_at
    row.updated_at = record.updated_at


class SqlEmbeddingRecordStore(EmbeddingRecordStore):
    """
    SQLAlchemy-backed record store (PostgreSQL in production, SQLite for dev).
    """

    def __init__(
            self,
            database_url: str,
            *,
            create_schema: bool = True,
            logger: logging.Logger | None = None,
    ) -> None:
        self.logger = logger or get_class_logger(self.__class__)

        engine_kwargs = {"pool_pre_ping": True}
        if database_url.startswith("sqlite"):
            # Needed for SQLite when used from API + worker threads
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(database_url, **engine_kwargs)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

        if create_schema:
            Base.metadata.create_all(self.engine)

        self.logger.info("SqlEmbeddingRecordStore ready (dialect=%s)", self.engine.dialect.name)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @staticmethod
    def _find(session: Session, document_id: str, document_type: DocumentType) -> Optional[EmbeddingRecordRow]:
        stmt = select(EmbeddingRecordRow).where(
            EmbeddingRecordRow.document_id == str(document_id),
            EmbeddingRecordRow.document_type == DocumentType(document_type).value,
        )
        return session.execute(stmt).scalar_one_or_none()

    def get_by_document(self, document_id: str, document_type: DocumentType) -> Optional[EmbeddingRecord]:
        with self._session() as session:
            row = self._find(session, document_id, document_type)
            return _to_record(row) if row is not None else None

    def add(self, record: EmbeddingRecord) -> None:
        try:
            with self._session() as session:
                if self._find(session, record.document_id, record.document_type) is not None:
                    raise DuplicateRecordError(record.document_id, record.document_type.value)
                row = EmbeddingRecordRow(
                    id=record.id,
                    document_id=record.document_id,
                    document_type=record.document_type.value,
                    created_at=record.created_at,
                )
                _copy_onto(row, record)
                session.add(row)
        except IntegrityError as e:
            # Lost a race against a concurrent add for the same key
            raise DuplicateRecordError(record.document_id, record.document_type.value) from e

    def update(self, record: EmbeddingRecord) -> None:
        with self._session() as session:
            row = self._find(session, record.document_id, record.document_type)
            if row is None:
                raise NotFoundError(record.document_id, "EmbeddingRecord")
            _copy_onto(row, record)

    def get_pending(self, batch_size: int) -> List[EmbeddingRecord]:
        stmt = (
            select(EmbeddingRecordRow)
            .where(
                EmbeddingRecordRow.status == EmbeddingStatus.PENDING.value,
                EmbeddingRecordRow.retry_count < settings.MAX_RETRIES,
            )
            .order_by(EmbeddingRecordRow.updated_at)
            .limit(batch_size)
        )
        with self._session() as session:
            return [_to_record(row) for row in session.execute(stmt).scalars()]

    def test_connection(self) -> bool:
        try:
            with self._session() as session:
                session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            self.logger.error("Record store connection failed: %s", e)
            return False
