"""
ASGI entrypoint for the precast backend.

Deployments set DJANGO_SETTINGS_MODULE=backend.settings.prod explicitly.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings.dev")

application = get_asgi_application()
