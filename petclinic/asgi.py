"""
ASGI config for petclinic project.

The records API is plain request/response, so the stock Django ASGI
handler is all that is served here.
"""
import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "petclinic.settings")

from django.core.asgi import get_asgi_application  # noqa: E402

application = get_asgi_application()
