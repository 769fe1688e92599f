"""
Record store interface and the in-process backend.

Handlers talk to a ``RecordStore`` only. The concrete backend is picked once
in ``build_store`` from ``STORAGE_BACKEND``; the Firestore backend lives in
``schoolboard.firestore_store``.
"""

import copy
import logging
import threading

from schoolboard.models import SchoolSettings, Teacher

logger = logging.getLogger(__name__)

TEACHERS = 'teachers'
TASKS = 'tasks'
ANNOUNCEMENTS = 'announcements'
UPLOADS = 'uploads'

COLLECTIONS = (TEACHERS, TASKS, ANNOUNCEMENTS, UPLOADS)

DEFAULT_TEACHER = Teacher(
    id='1',
    name='Default Teacher',
    email='teacher@school.com',
    password='password123',
)


class RecordStore:
    """Named collections of dict records keyed by ``id`` plus the school
    settings singleton.

    ``update`` and ``delete`` on a missing id are silent no-ops. Backend
    failures surface as ``StoreError``.
    """

    def __init__(self, default_settings):
        self.default_settings = default_settings

    def list(self, collection):
        raise NotImplementedError

    def get(self, collection, item_id):
        raise NotImplementedError

    def find_one(self, collection, field, value):
        raise NotImplementedError

    def insert(self, collection, item):
        raise NotImplementedError

    def update(self, collection, item_id, fields):
        raise NotImplementedError

    def delete(self, collection, item_id):
        raise NotImplementedError

    def get_settings(self):
        raise NotImplementedError

    def update_settings(self, fields):
        raise NotImplementedError


class InMemoryStore(RecordStore):
    """Process-local store. Nothing survives a restart.

    Each collection has its own lock so single operations stay atomic under
    threaded servers. Sequences of operations are not atomic.
    """

    def __init__(self, default_settings, seed_teachers=()):
        super().__init__(default_settings)
        self._collections = {name: [] for name in COLLECTIONS}
        self._locks = {name: threading.Lock() for name in COLLECTIONS}
        self._settings_lock = threading.Lock()
        self._settings = default_settings.to_dict()
        for teacher in seed_teachers:
            self._collections[TEACHERS].append(teacher.to_dict())

    def _items(self, collection):
        try:
            return self._collections[collection]
        except KeyError:
            raise ValueError(f'Unknown collection: {collection}')

    def list(self, collection):
        items = self._items(collection)
        with self._locks[collection]:
            return copy.deepcopy(items)

    def get(self, collection, item_id):
        items = self._items(collection)
        with self._locks[collection]:
            for item in items:
                if item['id'] == item_id:
                    return copy.deepcopy(item)
        return None

    def find_one(self, collection, field, value):
        items = self._items(collection)
        with self._locks[collection]:
            for item in items:
                if item.get(field) == value:
                    return copy.deepcopy(item)
        return None

    def insert(self, collection, item):
        items = self._items(collection)
        with self._locks[collection]:
            items.append(copy.deepcopy(item))

    def update(self, collection, item_id, fields):
        items = self._items(collection)
        with self._locks[collection]:
            for item in items:
                if item['id'] == item_id:
                    item.update(copy.deepcopy(fields))
                    return

    def delete(self, collection, item_id):
        items = self._items(collection)
        with self._locks[collection]:
            for index, item in enumerate(items):
                if item['id'] == item_id:
                    del items[index]
                    return

    def get_settings(self):
        with self._settings_lock:
            return dict(self._settings)

    def update_settings(self, fields):
        with self._settings_lock:
            self._settings.update(fields)
            return dict(self._settings)


def default_settings_from(config):
    return SchoolSettings(
        schoolName=config.get('DEFAULT_SCHOOL_NAME', 'Trio Primary School'),
        schoolLogo=config.get('DEFAULT_SCHOOL_LOGO', '/logos/default.png'),
    )


def build_store(config, firebase=None):
    """Create the record store selected by ``STORAGE_BACKEND``."""
    backend = config.get('STORAGE_BACKEND', 'memory')
    settings = default_settings_from(config)

    if backend == 'firebase':
        from schoolboard.firestore_store import FirestoreStore
        logger.info('Using Firestore record store')
        return FirestoreStore(firebase.db, settings)

    if backend != 'memory':
        raise ValueError(f'Unknown STORAGE_BACKEND: {backend!r}')

    logger.warning('Using in-memory record store; data will not persist')
    seed = (DEFAULT_TEACHER,) if config.get('SEED_DEFAULT_TEACHER') else ()
    return InMemoryStore(settings, seed_teachers=seed)
