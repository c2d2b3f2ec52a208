"""Development settings for SpaOps project.

This module extends the base settings with development specific
configuration, such as enabling debug, allowing all hosts and using
plain static file storage. Do not use these settings in production!
"""

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Manifest storage needs collectstatic; skip it locally and in tests
STORAGES = {
    **STORAGES,  # noqa: F405
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

# Fast hashing keeps the test suite snappy
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]
