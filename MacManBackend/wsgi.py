"""
WSGI config for MacManBackend project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "MacManBackend.settings.prod")

application = get_wsgi_application()
