from __future__ import annotations

import os
import sqlite3
import threading
import uuid
from datetime import datetime
from typing import Protocol

from pydantic import TypeAdapter

from resume_analyzer.schemas.resume import ResumeRecord, ResumeState, utc_now

_STATE_ADAPTER: TypeAdapter[ResumeState] = TypeAdapter(ResumeState)


class ResumeStore(Protocol):
    def create(
        self, owner_id: str, filename: str, text: str, job_description: str | None
    ) -> ResumeRecord: ...

    def update(self, record: ResumeRecord) -> None: ...

    def find_by_id(self, record_id: str) -> ResumeRecord | None: ...

    def find_latest_by_owner(self, owner_id: str) -> ResumeRecord | None: ...

    def list_by_owner(self, owner_id: str) -> list[ResumeRecord]: ...

    def delete(self, record_id: str) -> bool: ...


def _new_record(owner_id: str, filename: str, text: str, job_description: str | None) -> ResumeRecord:
    now = utc_now()
    return ResumeRecord(
        id=uuid.uuid4().hex,
        owner_id=owner_id,
        original_filename=filename,
        extracted_text=text,
        job_description=job_description or None,
        created_at=now,
        updated_at=now,
    )


class InMemoryResumeStore:
    def __init__(self) -> None:
        self._records: dict[str, ResumeRecord] = {}
        self._lock = threading.Lock()

    def create(
        self, owner_id: str, filename: str, text: str, job_description: str | None
    ) -> ResumeRecord:
        record = _new_record(owner_id, filename, text, job_description)
        with self._lock:
            self._records[record.id] = record
        return record

    def update(self, record: ResumeRecord) -> None:
        with self._lock:
            if record.id not in self._records:
                raise KeyError(f"Resume '{record.id}' does not exist.")
            self._records[record.id] = record

    def find_by_id(self, record_id: str) -> ResumeRecord | None:
        with self._lock:
            return self._records.get(record_id)

    def list_by_owner(self, owner_id: str) -> list[ResumeRecord]:
        with self._lock:
            owned = [r for r in self._records.values() if r.owner_id == owner_id]
        # dict keeps insertion order, so reversing first breaks created_at ties newest-first
        return sorted(reversed(owned), key=lambda r: r.created_at, reverse=True)

    def find_latest_by_owner(self, owner_id: str) -> ResumeRecord | None:
        records = self.list_by_owner(owner_id)
        return records[0] if records else None

    def delete(self, record_id: str) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None


class SQLiteResumeStore:
    def __init__(self, db_path: str):
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        with self._lock:
            if self._conn is not None:
                return self._conn

            if self._db_path != ":memory:":
                directory = os.path.dirname(self._db_path)
                if directory:
                    os.makedirs(directory, exist_ok=True)

            conn = sqlite3.connect(
                self._db_path,
                check_same_thread=False,
                timeout=5,
                isolation_level=None,
            )
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA synchronous=NORMAL;")
            conn.execute("PRAGMA busy_timeout=5000;")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS resume_records (
                    id TEXT PRIMARY KEY,
                    owner_id TEXT NOT NULL,
                    original_filename TEXT NOT NULL,
                    extracted_text TEXT NOT NULL,
                    job_description TEXT,
                    status TEXT NOT NULL,
                    state_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_resume_records_owner_created
                ON resume_records (owner_id, created_at DESC);
                """
            )
            self._conn = conn
            return conn

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    @staticmethod
    def _row_to_record(row: tuple) -> ResumeRecord:
        return ResumeRecord(
            id=row[0],
            owner_id=row[1],
            original_filename=row[2],
            extracted_text=row[3],
            job_description=row[4],
            state=_STATE_ADAPTER.validate_json(row[5]),
            created_at=datetime.fromisoformat(row[6]),
            updated_at=datetime.fromisoformat(row[7]),
        )

    def create(
        self, owner_id: str, filename: str, text: str, job_description: str | None
    ) -> ResumeRecord:
        record = _new_record(owner_id, filename, text, job_description)
        conn = self._get_connection()
        with self._lock:
            conn.execute(
                """
                INSERT INTO resume_records (
                    id, owner_id, original_filename, extracted_text, job_description,
                    status, state_json, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.id,
                    record.owner_id,
                    record.original_filename,
                    record.extracted_text,
                    record.job_description,
                    record.status,
                    record.state.model_dump_json(),
                    record.created_at.isoformat(),
                    record.updated_at.isoformat(),
                ),
            )
        return record

    def update(self, record: ResumeRecord) -> None:
        conn = self._get_connection()
        with self._lock:
            cur = conn.execute(
                """
                UPDATE resume_records
                SET status = ?, state_json = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    record.status,
                    record.state.model_dump_json(),
                    record.updated_at.isoformat(),
                    record.id,
                ),
            )
        if cur.rowcount == 0:
            raise KeyError(f"Resume '{record.id}' does not exist.")

    def _select(self, where: str, params: tuple, limit: int | None = None) -> list[ResumeRecord]:
        conn = self._get_connection()
        query = f"""
            SELECT id, owner_id, original_filename, extracted_text, job_description,
                   state_json, created_at, updated_at
            FROM resume_records
            WHERE {where}
            ORDER BY created_at DESC, rowid DESC
        """
        if limit is not None:
            query += f" LIMIT {int(limit)}"
        with self._lock:
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_record(row) for row in rows]

    def find_by_id(self, record_id: str) -> ResumeRecord | None:
        rows = self._select("id = ?", (record_id,), limit=1)
        return rows[0] if rows else None

    def find_latest_by_owner(self, owner_id: str) -> ResumeRecord | None:
        rows = self._select("owner_id = ?", (owner_id,), limit=1)
        return rows[0] if rows else None

    def list_by_owner(self, owner_id: str) -> list[ResumeRecord]:
        return self._select("owner_id = ?", (owner_id,))

    def delete(self, record_id: str) -> bool:
        conn = self._get_connection()
        with self._lock:
            cur = conn.execute("DELETE FROM resume_records WHERE id = ?", (record_id,))
        return cur.rowcount > 0
