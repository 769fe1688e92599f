"""Blob reference resolvers.

A resolver turns uploaded bytes into a URL that is stored with the record.
``FirebaseStorageResolver`` writes to a Cloud Storage bucket and hands back a
long-lived signed URL; ``PlaceholderResolver`` only synthesizes a
descriptive URL and stores nothing.
"""

import logging
import time
from datetime import datetime, timezone
from urllib.parse import unquote, urlparse

from google.api_core.exceptions import NotFound

logger = logging.getLogger(__name__)

LOGO_PREFIX = 'logos/'
UPLOAD_PREFIX = 'uploads/'

# Far enough out to behave like a permanent link.
SIGNED_URL_EXPIRY = datetime(2491, 3, 9, tzinfo=timezone.utc)


def _millis():
    return int(time.time() * 1000)


def sanitize_name(original_name):
    return original_name.replace(' ', '_')


def object_name(prefix, original_name, millis=None):
    """Bucket key for an upload, e.g. 'uploads/1700000000000-report_card.pdf'."""
    if millis is None:
        millis = _millis()
    return f'{prefix}{millis}-{sanitize_name(original_name)}'


def placeholder_url(base_url, prefix, original_name, millis=None):
    """Descriptive URL used when nothing was persisted."""
    if millis is None:
        millis = _millis()
    base_url = base_url.rstrip('/')
    if prefix == LOGO_PREFIX:
        return f'{base_url}/logos/logo-{millis}-{original_name}'
    return f'{base_url}/files/{sanitize_name(original_name)}-{millis}'


class PlaceholderResolver:

    def __init__(self, base_url):
        self.base_url = base_url

    def resolve(self, file_data, original_name, content_type, prefix):
        return placeholder_url(self.base_url, prefix, original_name)

    def release(self, url):
        logger.debug('No blob storage configured; nothing to release for %s', url)


class FirebaseStorageResolver:

    def __init__(self, bucket, placeholder_base, failed_base):
        self.bucket = bucket
        self.placeholder_base = placeholder_base
        self.failed_base = failed_base

    def resolve(self, file_data, original_name, content_type, prefix):
        """Upload bytes and return a public signed URL.

        Falls back to a placeholder URL if the upload fails so the caller can
        still finish the request.
        """
        path = object_name(prefix, original_name)
        try:
            blob = self.bucket.blob(path)
            blob.upload_from_string(file_data, content_type=content_type)
            blob.make_public()
            return blob.generate_signed_url(expiration=SIGNED_URL_EXPIRY, method='GET')
        except Exception as e:
            logger.warning('Storage upload of %s failed, using placeholder URL: %s', path, e)
            return self.fallback_url(prefix, original_name)

    def fallback_url(self, prefix, original_name):
        """URL stored when a durable upload fails.

        Logos get a bare failed-storage URL; other files keep the ordinary
        placeholder so the record still names the file.
        """
        if prefix == LOGO_PREFIX:
            return f"{self.failed_base.rstrip('/')}/logos/logo-{_millis()}"
        return placeholder_url(self.placeholder_base, prefix, original_name)

    def storage_key(self, url):
        """Map a stored URL back to its bucket key, or None if it is not ours."""
        if not url:
            return None
        for base in (self.placeholder_base, self.failed_base):
            if base and url.startswith(base):
                return None

        path = urlparse(url).path
        if '/o/' in path:
            key = path[path.rindex('/o/') + 3:]
        else:
            bucket_prefix = f'/{self.bucket.name}/'
            if not path.startswith(bucket_prefix):
                return None
            key = path[len(bucket_prefix):]
        return unquote(key) or None

    def release(self, url):
        """Delete the blob behind ``url``. Never raises."""
        key = self.storage_key(url)
        if key is None:
            logger.debug('Not a bucket URL, skipping blob delete: %s', url)
            return
        try:
            self.bucket.blob(key).delete()
            logger.info('Deleted %s from storage', key)
        except NotFound:
            logger.debug('Blob %s already gone', key)
        except Exception as e:
            logger.warning('Could not delete %s from storage (non-critical): %s', key, e)


def build_resolver(config, firebase=None):
    placeholder_base = config.get('PLACEHOLDER_STORAGE_URL', 'https://mock-storage-non-persistent.com')
    if firebase is not None and firebase.bucket is not None:
        logger.info('Using Firebase Storage bucket %s', firebase.bucket.name)
        return FirebaseStorageResolver(
            firebase.bucket,
            placeholder_base,
            config.get('FAILED_STORAGE_URL', 'https://mock-storage-failed.com'),
        )
    logger.warning('No storage bucket configured; uploads get placeholder URLs')
    return PlaceholderResolver(placeholder_base)
