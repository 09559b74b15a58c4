"""
Institute store.

Ordered, in-memory list of Institute records mirrored to a persistence slot
after every change.

Public API:
    InstituteStore.open(persistence, seed)  → InstituteStore
    InstituteStore.list()                   → list[Institute]
    InstituteStore.create(fields)           → Institute
    InstituteStore.update(id, fields)       → Institute | None
"""

import logging
import threading
from collections.abc import Iterable

from directory.errors import StorageError
from directory.models import Institute, InstituteForm
from directory.storage import InstitutePersistence

log = logging.getLogger(__name__)


class InstituteStore:
    def __init__(
        self,
        institutes: Iterable[Institute] = (),
        persistence: InstitutePersistence | None = None,
    ):
        self._institutes: list[Institute] = list(institutes)
        self.persistence = persistence
        # Sessions share one store; each mutation and its save run under the lock.
        self._lock = threading.RLock()

    @classmethod
    def open(
        cls,
        persistence: InstitutePersistence,
        seed: Iterable[Institute],
    ) -> "InstituteStore":
        """Load saved institutes, falling back to the seed list."""
        institutes = persistence.load()
        if institutes is None:
            institutes = list(seed)
            log.info("Using %d seed institutes.", len(institutes))
        return cls(institutes, persistence)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list(self) -> list[Institute]:
        with self._lock:
            return list(self._institutes)

    def get(self, institute_id: int) -> Institute | None:
        with self._lock:
            return next((i for i in self._institutes if i.id == institute_id), None)

    def __len__(self) -> int:
        return len(self._institutes)

    def next_id(self) -> int:
        with self._lock:
            return max((i.id for i in self._institutes), default=0) + 1

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, fields: InstituteForm) -> Institute:
        with self._lock:
            institute = Institute.from_form(self.next_id(), fields)
            self._institutes.append(institute)
            log.info("Created institute id=%d name=%r", institute.id, institute.name)
            self._persist()
        return institute

    def update(self, institute_id: int, fields: InstituteForm) -> Institute | None:
        with self._lock:
            for pos, current in enumerate(self._institutes):
                if current.id == institute_id:
                    break
            else:
                log.warning("Update skipped: no institute with id=%d", institute_id)
                return None

            institute = Institute.from_form(institute_id, fields)
            self._institutes[pos] = institute
            log.info("Updated institute id=%d name=%r", institute.id, institute.name)
            self._persist()
        return institute

    def _persist(self) -> bool:
        if self.persistence is None:
            return False
        try:
            self.persistence.save(self._institutes)
        except StorageError:
            log.exception("Failed to save %d institutes", len(self._institutes))
            return False
        return True
