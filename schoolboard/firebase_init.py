import os
from collections import namedtuple

import firebase_admin
from firebase_admin import credentials, firestore, storage

FirebaseHandles = namedtuple('FirebaseHandles', ['db', 'bucket'])


def init_firebase(app_config):
    """Initialise the Firebase Admin app and return Firestore/Storage handles.

    ``bucket`` is None when no storage bucket is configured.
    """
    cred_path = app_config.get('GOOGLE_APPLICATION_CREDENTIALS') or ''

    if cred_path and os.path.exists(cred_path):
        cred = credentials.Certificate(cred_path)
    else:
        cred = credentials.ApplicationDefault()

    bucket_name = app_config.get('FIREBASE_STORAGE_BUCKET', '')

    options = {}
    if bucket_name:
        options['storageBucket'] = bucket_name

    try:
        fb_app = firebase_admin.get_app()
    except ValueError:
        fb_app = firebase_admin.initialize_app(cred, options=options if options else None)

    db = firestore.client(app=fb_app)
    bucket = storage.bucket(app=fb_app) if bucket_name else None
    return FirebaseHandles(db=db, bucket=bucket)
