from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from decisionsim.models import DecisionBase, UserProfile, parse_decision

logger = logging.getLogger(__name__)

PROFILE_KEY = "user_profile"


class RecordNotFoundError(KeyError):
    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class ProfileRequiredError(LookupError):
    def __init__(self) -> None:
        super().__init__("no user profile has been saved")


class StoredDecision(BaseModel):
    id: str
    createdAt: str
    updatedAt: Optional[str] = None
    decision: Dict[str, Any]

    def to_decision(self) -> DecisionBase:
        return parse_decision(self.decision)


class StoredComparison(BaseModel):
    id: str
    createdAt: str
    comparison: Dict[str, Any]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class RecordStore:
    """
    Keyed records behind the API: the saved profile, decisions, and comparisons.

    Each record is a JSON payload in sqlite. Ids and timestamps are assigned
    here; nothing in the simulation core reads or writes the store.
    """

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._connect()
        try:
            conn.executescript(
                """
                create table if not exists settings (
                    key text primary key,
                    payload text not null
                );
                create table if not exists decisions (
                    seq integer primary key autoincrement,
                    id text unique not null,
                    payload text not null,
                    created_at text not null,
                    updated_at text
                );
                create table if not exists comparisons (
                    seq integer primary key autoincrement,
                    id text unique not null,
                    payload text not null,
                    created_at text not null
                );
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---------- profile ----------

    def save_profile(self, profile: UserProfile) -> UserProfile:
        conn = self._connect()
        try:
            conn.execute(
                """
                insert into settings (key, payload) values (?, ?)
                on conflict(key) do update set payload = excluded.payload
                """,
                (PROFILE_KEY, profile.model_dump_json()),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("saved user profile")
        return profile

    def get_profile(self) -> Optional[UserProfile]:
        conn = self._connect()
        try:
            row = conn.execute(
                "select payload from settings where key = ?", (PROFILE_KEY,)
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        return UserProfile.model_validate_json(row["payload"])

    def require_profile(self) -> UserProfile:
        profile = self.get_profile()
        if profile is None:
            raise ProfileRequiredError()
        return profile

    # ---------- decisions ----------

    def save_decision(self, decision: DecisionBase) -> StoredDecision:
        record = StoredDecision(
            id=uuid.uuid4().hex,
            createdAt=_now(),
            decision=decision.model_dump(mode="json"),
        )
        conn = self._connect()
        try:
            conn.execute(
                "insert into decisions (id, payload, created_at) values (?, ?, ?)",
                (record.id, json.dumps(record.decision), record.createdAt),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("saved %s decision %s", decision.type, record.id)
        return record

    def list_decisions(self) -> List[StoredDecision]:
        conn = self._connect()
        try:
            rows = conn.execute(
                "select id, payload, created_at, updated_at from decisions order by seq"
            ).fetchall()
        finally:
            conn.close()
        return [self._decision_from_row(row) for row in rows]

    def get_decision(self, decision_id: str) -> StoredDecision:
        conn = self._connect()
        try:
            row = conn.execute(
                "select id, payload, created_at, updated_at from decisions where id = ?",
                (decision_id,),
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            raise RecordNotFoundError("decision", decision_id)
        return self._decision_from_row(row)

    def update_decision(self, decision_id: str, updates: Dict[str, Any]) -> StoredDecision:
        """
        Merge `updates` into the stored decision and re-validate the result.

        `data` is merged key by key; `name` and `type` replace the old values.
        Changing `type` drops the old `data` entirely.
        """
        current = self.get_decision(decision_id)
        merged = dict(current.decision)
        if updates.get("type", merged.get("type")) != merged.get("type"):
            merged.pop("data", None)
        for key, value in updates.items():
            if key == "data" and isinstance(value, dict):
                merged["data"] = {**(merged.get("data") or {}), **value}
            else:
                merged[key] = value
        decision = parse_decision(merged)

        updated_at = _now()
        payload = decision.model_dump(mode="json")
        conn = self._connect()
        try:
            conn.execute(
                "update decisions set payload = ?, updated_at = ? where id = ?",
                (json.dumps(payload), updated_at, decision_id),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("updated decision %s", decision_id)
        return StoredDecision(
            id=decision_id,
            createdAt=current.createdAt,
            updatedAt=updated_at,
            decision=payload,
        )

    def delete_decision(self, decision_id: str) -> bool:
        conn = self._connect()
        try:
            cursor = conn.execute("delete from decisions where id = ?", (decision_id,))
            conn.commit()
            deleted = cursor.rowcount > 0
        finally:
            conn.close()
        if deleted:
            logger.info("deleted decision %s", decision_id)
        return deleted

    @staticmethod
    def _decision_from_row(row: sqlite3.Row) -> StoredDecision:
        return StoredDecision(
            id=row["id"],
            createdAt=row["created_at"],
            updatedAt=row["updated_at"],
            decision=json.loads(row["payload"]),
        )

    # ---------- comparisons ----------

    def save_comparison(self, comparison: Dict[str, Any]) -> StoredComparison:
        record = StoredComparison(id=uuid.uuid4().hex, createdAt=_now(), comparison=comparison)
        conn = self._connect()
        try:
            conn.execute(
                "insert into comparisons (id, payload, created_at) values (?, ?, ?)",
                (record.id, json.dumps(comparison), record.createdAt),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("saved comparison %s", record.id)
        return record

    def list_comparisons(self) -> List[StoredComparison]:
        conn = self._connect()
        try:
            rows = conn.execute(
                "select id, payload, created_at from comparisons order by seq"
            ).fetchall()
        finally:
            conn.close()
        return [
            StoredComparison(
                id=row["id"],
                createdAt=row["created_at"],
                comparison=json.loads(row["payload"]),
            )
            for row in rows
        ]

    def clear(self) -> None:
        conn = self._connect()
        try:
            conn.executescript(
                "delete from settings; delete from decisions; delete from comparisons;"
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("cleared all stored records")


__all__ = [
    "RecordNotFoundError",
    "ProfileRequiredError",
    "StoredDecision",
    "StoredComparison",
    "RecordStore",
]
