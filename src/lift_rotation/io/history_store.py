"""
JSON-based history storage, one document per user identity.

Handles reading, provisioning, migrating and appending to the per-user
workout history files.
"""

import logging
import os
import re
import threading
import weakref
from pathlib import Path
from tempfile import NamedTemporaryFile

from ..core.exercises.registry import EXERCISE_CATALOG
from ..core.models import ExerciseHistory, UserData, WorkoutSession
from .serializers import (
    UnknownExerciseError,
    ValidationError,
    json_to_user_data,
    user_data_to_json,
    validate_exercise_id,
)

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9]")

# Per-identity locks serialize read-modify-write cycles within a process.
# Weak values: a lock is dropped once no append for that identity holds it.
_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
_locks_guard = threading.Lock()


class StorageError(Exception):
    """Raised when a user document cannot be read or written."""

    pass


def sanitize_identity(identity: str) -> str:
    """Map an identity to a safe file stem (non-alphanumerics become "_")."""
    return _UNSAFE_CHARS.sub("_", identity)


def _lock_for(key: str) -> threading.Lock:
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.Lock()
        return lock


def default_user_data(identity: str) -> UserData:
    """Create a fresh document with an empty history for every catalog exercise."""
    return UserData(
        identity=identity,
        exercises=[ExerciseHistory.empty(e) for e in EXERCISE_CATALOG],
    )


def migrate_catalog(user_data: UserData) -> list[str]:
    """
    Add empty histories for catalog exercises missing from user_data.

    Returns:
        Ids of the exercises that were added
    """
    existing = {e.id for e in user_data.exercises}
    added: list[str] = []
    for exercise in EXERCISE_CATALOG:
        if exercise.id not in existing:
            user_data.exercises.append(ExerciseHistory.empty(exercise))
            added.append(exercise.id)
    return added


class HistoryStore:
    """
    Manages per-user workout history stored as JSON documents.

    Each identity owns ``<data_dir>/<sanitized identity>.json`` containing
    the identity and one history per exercise.  Writes replace the whole
    file atomically.
    """

    def __init__(self, data_dir: str | Path):
        """
        Initialize the history store.

        Args:
            data_dir: Directory holding the per-user JSON files
        """
        self.data_dir = Path(data_dir)

    def user_path(self, identity: str) -> Path:
        """Return the JSON file path for an identity."""
        return self.data_dir / f"{sanitize_identity(identity)}.json"

    def exists(self, identity: str) -> bool:
        """Check if a document has been written for the identity."""
        return self.user_path(identity).exists()

    def ensure_data_dir(self) -> None:
        """
        Create the data directory if needed.

        Raises:
            StorageError: If the directory cannot be created
        """
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create data directory {self.data_dir}: {e}") from e

    def get_user_history(self, identity: str) -> UserData:
        """
        Load the full history for an identity.

        Unseen identities get a fresh document; catalog exercises missing
        from a stored document are added with empty history.  Nothing is
        written until the next append.

        Args:
            identity: Verified user identity

        Returns:
            UserData with every catalog exercise present

        Raises:
            StorageError: If the file exists but is unreadable or corrupt
        """
        path = self.user_path(identity)
        if not path.exists():
            logger.info("No history for identity %r; starting empty", identity)
            return default_user_data(identity)

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Failed to read %s: %s", path, e)
            raise StorageError(f"Cannot read {path}: {e}") from e
        except UnicodeDecodeError as e:
            logger.error("Corrupt history file %s: %s", path, e)
            raise StorageError(f"Corrupt history file {path}: not valid UTF-8") from e

        try:
            user_data = json_to_user_data(text)
        except ValidationError as e:
            logger.error("Corrupt history file %s: %s", path, e)
            raise StorageError(f"Corrupt history file {path}: {e}") from e

        added = migrate_catalog(user_data)
        if added:
            logger.debug("Added %d new catalog exercises for %r: %s", len(added), identity, added)

        return user_data

    def get_exercise_history(self, identity: str, exercise_id: str) -> ExerciseHistory | None:
        """Return one exercise's history for an identity, or None if unknown."""
        return self.get_user_history(identity).find(exercise_id)

    def save_user_data(self, user_data: UserData) -> None:
        """
        Write a user document, replacing the previous file atomically.

        Args:
            user_data: Document to persist

        Raises:
            StorageError: If the file cannot be written
        """
        self.ensure_data_dir()
        path = self.user_path(user_data.identity)
        payload = user_data_to_json(user_data) + "\n"

        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                "w", dir=self.data_dir, suffix=".tmp", delete=False, encoding="utf-8"
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            logger.error("Failed to write %s: %s", path, e)
            raise StorageError(f"Cannot write {path}: {e}") from e

    def append_session(
        self, identity: str, exercise_id: str, session: WorkoutSession
    ) -> ExerciseHistory:
        """
        Append a session to one exercise's history and persist it.

        The read-modify-write cycle is serialized per identity.

        Args:
            identity: Verified user identity
            exercise_id: Catalog exercise id
            session: Session to append

        Returns:
            The updated ExerciseHistory

        Raises:
            UnknownExerciseError: If exercise_id is not in the catalog
            StorageError: If the document cannot be read or written
        """
        validate_exercise_id(exercise_id)

        with _lock_for(sanitize_identity(identity)):
            user_data = self.get_user_history(identity)
            history = user_data.find(exercise_id)
            if history is None:
                # migrate_catalog guarantees presence for catalog ids
                raise UnknownExerciseError(exercise_id)

            history.history.append(session)
            self.save_user_data(user_data)

        logger.info(
            "Logged %s for %r: %.1f kg x %d", exercise_id, identity, session.weight_kg, session.reps
        )
        return history
