"""
WSGI config for learnsphere project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'learnsphere.settings')

application = get_wsgi_application()
