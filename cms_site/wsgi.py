# FILE: cms_site/wsgi.py
"""
WSGI config for cms_site project.
Exposes the WSGI callable as a module-level variable named `application`.
"""

import os
from pathlib import Path

from django.core.wsgi import get_wsgi_application
from dotenv import load_dotenv

# ── Load .env early (so DJANGO_SETTINGS_MODULE and others can come from env) ──
base_dir = Path(__file__).resolve().parent.parent
env_file = base_dir / ".env"
if env_file.exists():
    load_dotenv(env_file.as_posix())

os.environ.setdefault("DJANGO_SETTINGS_MODULE", os.getenv("DJANGO_SETTINGS_MODULE", "cms_site.settings"))

application = get_wsgi_application()
