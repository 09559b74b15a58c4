import logging
import sys
import threading
import pytest
from directory.errors import StorageError
from directory.models import Institute, InstituteForm
from directory.seed import INITIAL_INSTITUTES
from directory.storage import STORAGE_KEY, InstitutePersistence, JsonFileStorage, MemoryStorage
from directory.store import InstituteStore


class FailingStorage(MemoryStorage):
    """Storage whose writes always fail, like a full or disabled disk."""

    def set_item(self, key, value):
        raise StorageError("disk full")


@pytest.fixture
def persistence():
    return InstitutePersistence(MemoryStorage())


@pytest.fixture
def form():
    return InstituteForm(name="AIIMS", city="Delhi", course="DM", seats="2")


class TestOpen:
    """Test startup loading."""

    def test_empty_slot_uses_seed(self, persistence):
        store = InstituteStore.open(persistence, INITIAL_INSTITUTES)
        assert store.list() == INITIAL_INSTITUTES

    def test_malformed_slot_uses_seed(self):
        """Test that malformed saved data falls back to the seed without raising."""
        persistence = InstitutePersistence(MemoryStorage({STORAGE_KEY: "[{oops"}))
        store = InstituteStore.open(persistence, INITIAL_INSTITUTES)
        assert store.list() == INITIAL_INSTITUTES

    def test_saved_data_wins_over_seed(self, persistence, form):
        saved = [Institute.from_form(9, form)]
        persistence.save(saved)
        store = InstituteStore.open(persistence, INITIAL_INSTITUTES)
        assert store.list() == saved

    def test_seed_ids_are_unique(self):
        ids = [i.id for i in INITIAL_INSTITUTES]
        assert len(ids) == len(set(ids))


class TestCreate:
    """Test id assignment and persistence on create."""

    def test_first_record_gets_id_one(self, persistence, form):
        """Test that creating in an empty store yields id 1 with the given fields."""
        store = InstituteStore([], persistence)
        created = store.create(form)

        assert created.id == 1
        assert store.list() == [
            Institute(id=1, name="AIIMS", city="Delhi", course="DM", seats="2")
        ]

    def test_next_id_after_gap(self, persistence, form):
        """Test that ids 1 and 3 lead to a new id of 4."""
        store = InstituteStore(
            [Institute.from_form(1, form), Institute.from_form(3, form)], persistence
        )
        assert store.create(form).id == 4

    def test_id_greater_than_all_and_length_grows(self, form):
        store = InstituteStore(INITIAL_INSTITUTES)
        before = store.list()
        created = store.create(form)

        assert all(created.id > i.id for i in before)
        assert len(store) == len(before) + 1
        assert store.list()[-1] == created

    def test_create_persists(self, persistence, form):
        store = InstituteStore([], persistence)
        store.create(form)
        assert persistence.load() == store.list()

    def test_list_is_a_copy(self, form):
        store = InstituteStore([])
        store.list().append(Institute.from_form(1, form))
        assert len(store) == 0


class TestUpdate:
    """Test in-place updates."""

    def test_update_replaces_fields_keeps_id(self, persistence, form):
        store = InstituteStore(INITIAL_INSTITUTES, persistence)
        target = store.list()[2]
        count = len(store)

        updated = store.update(target.id, form)

        assert updated.id == target.id
        assert len(store) == count
        assert store.get(target.id) == Institute.from_form(target.id, form)
        assert store.list()[2].id == target.id

    def test_update_persists(self, persistence, form):
        store = InstituteStore(INITIAL_INSTITUTES, persistence)
        store.update(1, form)
        assert persistence.load()[0].name == "AIIMS"
        assert persistence.load()[0].city == "Delhi"

    def test_missing_id_is_logged_noop(self, persistence, form, caplog):
        """Test that updating an unknown id changes nothing and logs a warning."""
        store = InstituteStore(INITIAL_INSTITUTES, persistence)

        with caplog.at_level(logging.WARNING, logger="directory.store"):
            result = store.update(999, form)

        assert result is None
        assert store.list() == INITIAL_INSTITUTES
        assert persistence.load() is None
        assert "id=999" in caplog.text


class TestPersistenceFailure:
    """Test that write failures never break a mutation."""

    def test_create_survives_failed_save(self, form, caplog):
        store = InstituteStore([], InstitutePersistence(FailingStorage()))

        with caplog.at_level(logging.ERROR, logger="directory.store"):
            created = store.create(form)

        assert created.id == 1
        assert len(store) == 1
        assert "Failed to save" in caplog.text

    def test_update_survives_failed_save(self, form):
        store = InstituteStore(INITIAL_INSTITUTES, InstitutePersistence(FailingStorage()))
        assert store.update(2, form).name == "AIIMS"


class TestConcurrentSessions:
    """Test that sessions sharing one store never hand out the same id."""

    THREADS = 4
    CREATES_PER_THREAD = 100

    @pytest.fixture
    def fast_switching(self):
        """Force frequent thread switches so races show up."""
        previous = sys.getswitchinterval()
        sys.setswitchinterval(1e-6)
        yield
        sys.setswitchinterval(previous)

    def test_parallel_creates_get_unique_ids(self, tmp_path, form, fast_switching, caplog):
        store = InstituteStore([], InstitutePersistence(JsonFileStorage(tmp_path)))
        start = threading.Barrier(self.THREADS)

        def worker():
            start.wait()
            for _ in range(self.CREATES_PER_THREAD):
                store.create(form)

        threads = [threading.Thread(target=worker) for _ in range(self.THREADS)]
        with caplog.at_level(logging.ERROR, logger="directory.store"):
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        expected = self.THREADS * self.CREATES_PER_THREAD
        ids = [i.id for i in store.list()]
        assert len(ids) == expected
        assert sorted(ids) == list(range(1, expected + 1))
        assert "Failed to save" not in caplog.text

        saved = InstitutePersistence(JsonFileStorage(tmp_path)).load()
        assert saved == store.list()
        assert [p.name for p in tmp_path.iterdir()] == [f"{STORAGE_KEY}.json"]

    def test_parallel_updates_keep_count(self, form, fast_switching):
        store = InstituteStore(INITIAL_INSTITUTES, InstitutePersistence(MemoryStorage()))
        targets = [i.id for i in INITIAL_INSTITUTES]

        def worker():
            for institute_id in targets:
                store.update(institute_id, form)

        threads = [threading.Thread(target=worker) for _ in range(self.THREADS)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert [i.id for i in store.list()] == targets
        assert all(i.name == "AIIMS" for i in store.list())
