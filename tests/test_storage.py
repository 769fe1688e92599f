"""
Blob resolver tests. The bucket is a MagicMock; nothing is uploaded.
"""

import re
from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import Forbidden, NotFound

from schoolboard.services.storage import (LOGO_PREFIX, UPLOAD_PREFIX,
                                          FirebaseStorageResolver,
                                          PlaceholderResolver, build_resolver,
                                          object_name, placeholder_url)

PLACEHOLDER = 'https://mock-storage-non-persistent.com'
FAILED = 'https://mock-storage-failed.com'


@pytest.fixture
def bucket():
    bucket = MagicMock()
    bucket.name = 'school-board.appspot.com'
    return bucket


@pytest.fixture
def firebase_resolver(bucket):
    return FirebaseStorageResolver(bucket, PLACEHOLDER, FAILED)


def test_object_name_replaces_spaces():
    assert object_name(UPLOAD_PREFIX, 'report card.pdf', millis=42) == 'uploads/42-report_card.pdf'


def test_placeholder_shapes():
    assert placeholder_url(PLACEHOLDER, UPLOAD_PREFIX, 'my notes.pdf', millis=7) == \
        f'{PLACEHOLDER}/files/my_notes.pdf-7'
    assert placeholder_url(PLACEHOLDER, LOGO_PREFIX, 'logo.png', millis=7) == \
        f'{PLACEHOLDER}/logos/logo-7-logo.png'


def test_placeholder_resolver_never_touches_storage():
    resolver = PlaceholderResolver(PLACEHOLDER)
    url = resolver.resolve(b'data', 'notes.pdf', 'application/pdf', UPLOAD_PREFIX)
    assert url.startswith(f'{PLACEHOLDER}/files/notes.pdf-')
    resolver.release(url)


def test_resolve_uploads_and_signs(bucket, firebase_resolver):
    blob = bucket.blob.return_value
    blob.generate_signed_url.return_value = 'https://storage.googleapis.com/school-board.appspot.com/uploads/1-a.pdf?sig'

    url = firebase_resolver.resolve(b'data', 'a.pdf', 'application/pdf', UPLOAD_PREFIX)

    assert url.endswith('?sig')
    assert bucket.blob.call_args[0][0].startswith('uploads/')
    blob.upload_from_string.assert_called_once_with(b'data', content_type='application/pdf')
    blob.make_public.assert_called_once_with()


def test_resolve_falls_back_on_failure(bucket, firebase_resolver):
    bucket.blob.return_value.upload_from_string.side_effect = Forbidden('no access')

    url = firebase_resolver.resolve(b'data', 'logo.png', 'image/png', LOGO_PREFIX)

    assert re.fullmatch(rf'{re.escape(FAILED)}/logos/logo-\d+', url)


def test_failed_file_upload_keeps_named_placeholder(bucket, firebase_resolver):
    bucket.blob.return_value.upload_from_string.side_effect = Forbidden('no access')

    url = firebase_resolver.resolve(b'data', 'week plan.pdf', 'application/pdf', UPLOAD_PREFIX)

    assert re.fullmatch(rf'{re.escape(PLACEHOLDER)}/files/week_plan\.pdf-\d+', url)


def test_storage_key_from_signed_url(firebase_resolver):
    url = 'https://storage.googleapis.com/school-board.appspot.com/uploads/1-my%20file.pdf?X=1'
    assert firebase_resolver.storage_key(url) == 'uploads/1-my file.pdf'


def test_storage_key_from_download_url(firebase_resolver):
    url = 'https://firebasestorage.googleapis.com/v0/b/school-board.appspot.com/o/uploads%2F1-a.pdf?alt=media'
    assert firebase_resolver.storage_key(url) == 'uploads/1-a.pdf'


def test_storage_key_ignores_placeholders(firebase_resolver):
    assert firebase_resolver.storage_key(f'{PLACEHOLDER}/files/a.pdf-1') is None
    assert firebase_resolver.storage_key(f'{FAILED}/logos/logo-1-a.png') is None


def test_release_deletes_blob(bucket, firebase_resolver):
    firebase_resolver.release('https://storage.googleapis.com/school-board.appspot.com/uploads/1-a.pdf')
    bucket.blob.assert_called_with('uploads/1-a.pdf')
    bucket.blob.return_value.delete.assert_called_once_with()


def test_release_swallows_errors(bucket, firebase_resolver):
    bucket.blob.return_value.delete.side_effect = NotFound('gone')
    firebase_resolver.release('https://storage.googleapis.com/school-board.appspot.com/uploads/1-a.pdf')

    bucket.blob.return_value.delete.side_effect = RuntimeError('network')
    firebase_resolver.release('https://storage.googleapis.com/school-board.appspot.com/uploads/1-a.pdf')


def test_build_resolver_without_bucket():
    assert isinstance(build_resolver({'PLACEHOLDER_STORAGE_URL': PLACEHOLDER}), PlaceholderResolver)


def test_build_resolver_with_bucket(bucket):
    firebase = MagicMock(bucket=bucket)
    assert isinstance(build_resolver({}, firebase), FirebaseStorageResolver)
