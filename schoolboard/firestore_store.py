"""
Firestore record store.

Each record is a document whose ID is the record's ``id`` inside a
collection of the same name (teachers live in ``users``). The school
settings singleton is the document ``settings/school``.
"""

import logging
from functools import wraps

from google.api_core.exceptions import GoogleAPIError, NotFound
from google.cloud.firestore_v1 import FieldFilter

from schoolboard.errors import StoreError
from schoolboard.store import RecordStore, TEACHERS

logger = logging.getLogger(__name__)

SETTINGS_COLLECTION = 'settings'
SETTINGS_DOCUMENT = 'school'

COLLECTION_NAMES = {
    TEACHERS: 'users',
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _doc_to_dict(doc_snapshot):
    """Convert a Firestore DocumentSnapshot to a dict with 'id' field."""
    if not doc_snapshot.exists:
        return None
    d = doc_snapshot.to_dict()
    d['id'] = doc_snapshot.id
    return d


def _translate_errors(method):
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except GoogleAPIError as e:
            logger.error('Firestore %s failed: %s', method.__name__, e)
            raise StoreError(f'Firestore {method.__name__} failed') from e
    return wrapper


class FirestoreStore(RecordStore):

    def __init__(self, db, default_settings):
        super().__init__(default_settings)
        self.db = db

    def _collection(self, collection):
        return self.db.collection(COLLECTION_NAMES.get(collection, collection))

    @_translate_errors
    def list(self, collection):
        return [_doc_to_dict(doc) for doc in self._collection(collection).stream()]

    @_translate_errors
    def get(self, collection, item_id):
        return _doc_to_dict(self._collection(collection).document(item_id).get())

    @_translate_errors
    def find_one(self, collection, field, value):
        docs = (
            self._collection(collection)
            .where(filter=FieldFilter(field, '==', value))
            .limit(1)
            .stream()
        )
        for doc in docs:
            return _doc_to_dict(doc)
        return None

    @_translate_errors
    def insert(self, collection, item):
        self._collection(collection).document(item['id']).set(item)

    @_translate_errors
    def update(self, collection, item_id, fields):
        try:
            self._collection(collection).document(item_id).update(fields)
        except NotFound:
            logger.debug('Skipping update of missing %s/%s', collection, item_id)

    @_translate_errors
    def delete(self, collection, item_id):
        self._collection(collection).document(item_id).delete()

    def _settings_ref(self):
        return self.db.collection(SETTINGS_COLLECTION).document(SETTINGS_DOCUMENT)

    @_translate_errors
    def get_settings(self):
        doc_ref = self._settings_ref()
        doc = doc_ref.get()
        if doc.exists:
            return doc.to_dict()
        defaults = self.default_settings.to_dict()
        doc_ref.set(defaults)
        return defaults

    @_translate_errors
    def update_settings(self, fields):
        # Reading first writes the defaults if the document is new, so the
        # merge never leaves a field unset.
        current = self.get_settings()
        self._settings_ref().set(fields, merge=True)
        return {**current, **fields}
