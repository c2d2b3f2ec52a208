"""WSGI config for SpaOps project.

Entry point for gunicorn/uwsgi. Production servers get the production
settings unless DJANGO_SETTINGS_MODULE says otherwise; `manage.py
runserver` keeps using the development settings.
"""

import os
from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.prod')

application = get_wsgi_application()
