"""WSGI config for Saakie project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "saakie.settings.prod")

application = get_wsgi_application()
