# backend/settings/prod.py
"""
PATH: backend/settings/prod.py

PRODUCTION SETTINGS

Fail closed on anything the checkout engine or the clinic UI depends on:
- SECRET_KEY, ALLOWED_HOSTS, CORS/CSRF origins must be set (https only)
- DATABASE_URL must resolve to PostgreSQL: the order commit engine relies on
  SELECT ... FOR UPDATE row locks, which SQLite does not provide
- Admin static files are served by WhiteNoise
"""

from __future__ import annotations

from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F403
from .base import BASE_DIR, MIDDLEWARE, env

POSTGRES_ENGINES = frozenset(
    {
        "django.db.backends.postgresql",
        "django.contrib.gis.db.backends.postgis",
    }
)


def _required(value, name: str):
    if not value:
        raise ImproperlyConfigured(f"{name} must be set in production.")
    return value


def _https_only(origins, name: str):
    insecure = [o for o in origins if not o.startswith("https://")]
    if insecure:
        raise ImproperlyConfigured(
            f"{name} must use https:// in production (got {', '.join(insecure)})."
        )
    return origins


DEBUG = False

SECRET_KEY = _required((env("SECRET_KEY", default="") or "").strip(), "SECRET_KEY")
if SECRET_KEY == "dev-insecure-change-me":
    raise ImproperlyConfigured("SECRET_KEY is still the development placeholder.")

ALLOWED_HOSTS = _required(env.list("ALLOWED_HOSTS", default=[]), "ALLOWED_HOSTS")

# -----------------------------------------
# DATABASE (PostgreSQL only)
# -----------------------------------------
_required((env("DATABASE_URL", default="") or "").strip(), "DATABASE_URL")

DATABASES = {"default": env.db("DATABASE_URL")}
if DATABASES["default"]["ENGINE"] not in POSTGRES_ENGINES:
    raise ImproperlyConfigured(
        "Production checkout needs row locks: DATABASE_URL must point at PostgreSQL "
        f"(got {DATABASES['default']['ENGINE']})."
    )
DATABASES["default"]["CONN_MAX_AGE"] = env.int("DB_CONN_MAX_AGE", default=60)
# Fail a blocked checkout instead of hanging the worker; the engine retries it.
DATABASES["default"].setdefault("OPTIONS", {})["options"] = (
    f"-c lock_timeout={env.int('DB_LOCK_TIMEOUT_MS', default=5000)}"
)

# -----------------------------------------
# STATIC (admin only, via WhiteNoise)
# -----------------------------------------
STATIC_ROOT = env("STATIC_ROOT", default=str(BASE_DIR / "staticfiles"))

MIDDLEWARE = [
    MIDDLEWARE[0],
    "whitenoise.middleware.WhiteNoiseMiddleware",
    *MIDDLEWARE[1:],
]
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}

# -----------------------------------------
# TRANSPORT SECURITY
# -----------------------------------------
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = env.bool("SECURE_SSL_REDIRECT", default=True)
SECURE_HSTS_SECONDS = env.int("SECURE_HSTS_SECONDS", default=3600)
SECURE_HSTS_INCLUDE_SUBDOMAINS = env.bool("SECURE_HSTS_INCLUDE_SUBDOMAINS", default=True)

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SESSION_COOKIE_HTTPONLY = True

SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

# -----------------------------------------
# CORS / CSRF (the clinic UI origin)
# -----------------------------------------
CORS_ALLOWED_ORIGINS = _https_only(
    _required(env.list("CORS_ALLOWED_ORIGINS", default=[]), "CORS_ALLOWED_ORIGINS"),
    "CORS_ALLOWED_ORIGINS",
)
CSRF_TRUSTED_ORIGINS = _https_only(
    _required(env.list("CSRF_TRUSTED_ORIGINS", default=[]), "CSRF_TRUSTED_ORIGINS"),
    "CSRF_TRUSTED_ORIGINS",
)
