import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes')


class Config:
    SECRET_KEY = os.environ.get('SESSION_SECRET') or os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', 16 * 1024 * 1024))

    # 'memory' or 'firebase'
    STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND', 'memory').lower()
    GOOGLE_APPLICATION_CREDENTIALS = os.environ.get('GOOGLE_APPLICATION_CREDENTIALS', './firebase-service-account.json')
    FIREBASE_STORAGE_BUCKET = os.environ.get('FIREBASE_STORAGE_BUCKET', '')

    PLACEHOLDER_STORAGE_URL = os.environ.get('PLACEHOLDER_STORAGE_URL', 'https://mock-storage-non-persistent.com')
    FAILED_STORAGE_URL = os.environ.get('FAILED_STORAGE_URL', 'https://mock-storage-failed.com')

    DEFAULT_SCHOOL_NAME = os.environ.get('DEFAULT_SCHOOL_NAME', 'Trio Primary School')
    DEFAULT_SCHOOL_LOGO = os.environ.get('DEFAULT_SCHOOL_LOGO', '/logos/default.png')
    SEED_DEFAULT_TEACHER = _env_flag('SEED_DEFAULT_TEACHER', 'true')


class TestConfig(Config):
    TESTING = True
    STORAGE_BACKEND = 'memory'
    FIREBASE_STORAGE_BUCKET = ''
    SEED_DEFAULT_TEACHER = False
