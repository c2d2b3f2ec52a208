"""ASGI config for SpaOps project.

Exposes the ASGI application for async-capable servers (uvicorn, daphne).
The API itself is synchronous; this entry point only exists so the project
can be deployed behind an ASGI server.
"""

import os
from django.core.asgi import get_asgi_application  # type: ignore

# Use the development settings by default. Production servers should set
# DJANGO_SETTINGS_MODULE accordingly.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.dev')

application = get_asgi_application()
