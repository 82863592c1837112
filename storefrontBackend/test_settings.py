import os

# Mock SECRET_KEY for tests BEFORE importing settings to bypass validation
os.environ.setdefault("SECRET_KEY", "django-insecure-test-key-for-unit-tests-only")

from .settings import *  # noqa: F403

# Override Database to use SQLite for tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",  # noqa: F405
    }
}

# In-process services only
INFRASTRUCTURE["CATALOG_REPOSITORY"] = "django"  # noqa: F405
INFRASTRUCTURE["SHIPPING_REPOSITORY"] = "django"  # noqa: F405
TRACING["ENABLED"] = False  # noqa: F405

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
