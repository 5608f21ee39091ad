"""Evaluation persistence collaborators."""

from __future__ import annotations

import json
import re
import threading
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import ValidationError as PydanticValidationError

from .errors import StoreError
from .schemas import Evaluation, ProfileStatus

DEFAULT_STATUS: ProfileStatus = "draft"

_USER_ID = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9_.-]*$")


@runtime_checkable
class EvaluationStore(Protocol):
    """Persistence contract for evaluations and profile status."""

    def save(self, user_id: str, evaluation: Evaluation) -> None:
        """Store ``evaluation`` as the user's current result."""

    def get(self, user_id: str) -> Evaluation | None:
        """Return the stored evaluation, or None."""

    def delete(self, user_id: str) -> None:
        """Drop the stored evaluation if any."""

    def all(self) -> dict[str, Evaluation]:
        """Return every stored evaluation keyed by user id."""

    def get_profile_status(self, user_id: str) -> ProfileStatus:
        """Return the profile status, ``draft`` when unknown."""

    def update_profile_status(self, user_id: str, status: ProfileStatus) -> None:
        """Unconditionally set the profile status."""

    def compare_and_set_status(
        self, user_id: str, expected: ProfileStatus, status: ProfileStatus
    ) -> bool:
        """Set ``status`` only if the current status equals ``expected``."""


class InMemoryEvaluationStore:
    """Process-local store guarded by a single lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._evaluations: dict[str, Evaluation] = {}
        self._statuses: dict[str, ProfileStatus] = {}

    def save(self, user_id: str, evaluation: Evaluation) -> None:
        with self._lock:
            self._evaluations[user_id] = evaluation

    def get(self, user_id: str) -> Evaluation | None:
        with self._lock:
            return self._evaluations.get(user_id)

    def delete(self, user_id: str) -> None:
        with self._lock:
            self._evaluations.pop(user_id, None)

    def all(self) -> dict[str, Evaluation]:
        with self._lock:
            return dict(self._evaluations)

    def get_profile_status(self, user_id: str) -> ProfileStatus:
        with self._lock:
            return self._statuses.get(user_id, DEFAULT_STATUS)

    def update_profile_status(self, user_id: str, status: ProfileStatus) -> None:
        with self._lock:
            self._statuses[user_id] = status

    def compare_and_set_status(
        self, user_id: str, expected: ProfileStatus, status: ProfileStatus
    ) -> bool:
        with self._lock:
            if self._statuses.get(user_id, DEFAULT_STATUS) != expected:
                return False
            self._statuses[user_id] = status
            return True


class JsonFileEvaluationStore:
    """Directory-backed store writing one JSON document per user.

    Layout::

        <root>/evaluations/<user_id>.json
        <root>/profiles/<user_id>.json   {"status": "..."}
    """

    def __init__(self, root: str | Path):
        self._root = Path(root)
        self._lock = threading.Lock()

    def save(self, user_id: str, evaluation: Evaluation) -> None:
        with self._lock:
            self._write(self._evaluation_path(user_id), evaluation.to_wire())

    def get(self, user_id: str) -> Evaluation | None:
        with self._lock:
            data = self._read(self._evaluation_path(user_id))
        return self._load_evaluation(user_id, data) if data is not None else None

    def delete(self, user_id: str) -> None:
        path = self._evaluation_path(user_id)
        with self._lock:
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                raise StoreError(f"Failed to delete evaluation for {user_id!r}: {exc}") from exc

    def all(self) -> dict[str, Evaluation]:
        directory = self._root / "evaluations"
        results: dict[str, Evaluation] = {}
        with self._lock:
            if not directory.exists():
                return results
            for path in sorted(directory.glob("*.json")):
                data = self._read(path)
                if data is not None:
                    results[path.stem] = self._load_evaluation(path.stem, data)
        return results

    def get_profile_status(self, user_id: str) -> ProfileStatus:
        with self._lock:
            return self._status(user_id)

    def update_profile_status(self, user_id: str, status: ProfileStatus) -> None:
        with self._lock:
            self._write(self._profile_path(user_id), {"status": status})

    def compare_and_set_status(
        self, user_id: str, expected: ProfileStatus, status: ProfileStatus
    ) -> bool:
        with self._lock:
            if self._status(user_id) != expected:
                return False
            self._write(self._profile_path(user_id), {"status": status})
            return True

    def _status(self, user_id: str) -> ProfileStatus:
        data = self._read(self._profile_path(user_id)) or {}
        return data.get("status", DEFAULT_STATUS)

    def _evaluation_path(self, user_id: str) -> Path:
        return self._root / "evaluations" / f"{self._check_user_id(user_id)}.json"

    def _profile_path(self, user_id: str) -> Path:
        return self._root / "profiles" / f"{self._check_user_id(user_id)}.json"

    @staticmethod
    def _check_user_id(user_id: str) -> str:
        if not _USER_ID.match(user_id or ""):
            raise StoreError(f"Invalid user id: {user_id!r}")
        return user_id

    @staticmethod
    def _read(path: Path) -> dict | None:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StoreError(f"Failed to read {path}: {exc}") from exc
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise StoreError(f"Corrupt store document {path}: {exc}") from exc

    @staticmethod
    def _write(path: Path, payload: dict) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(".tmp")
            tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp.replace(path)
        except OSError as exc:
            raise StoreError(f"Failed to write {path}: {exc}") from exc

    @staticmethod
    def _load_evaluation(user_id: str, data: dict) -> Evaluation:
        try:
            return Evaluation.model_validate(data)
        except PydanticValidationError as exc:
            raise StoreError(f"Stored evaluation for {user_id!r} is invalid: {exc}") from exc
