"""Django settings for the staff points ledger.


The project exposes a single ledger engine (core) and a thin JSON API (api):
- Operators credit/debit integer point balances keyed by opaque user ids
- Every mutation appends an immutable history row in the same transaction
- Statements are rendered from history on demand


Points policy, permissions and cooldowns are read from the environment below.
"""

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-only-insecure-key")
DEBUG = os.getenv("DEBUG", "1") in ("1", "true", "True", "yes")
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "*").split(",")
CSRF_TRUSTED_ORIGINS = os.getenv("CSRF_TRUSTED_ORIGINS", "").split(",") if os.getenv("CSRF_TRUSTED_ORIGINS") else []

def env_bool(name, default=""):
    v = os.getenv(name, default)
    return v.lower() in ("1", "true", "yes", "on")

def env_list(name, default=""):
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]

#######################
# Points policy (single source of truth for the ledger engine)
POINTS_ALLOW_NEGATIVE_BALANCE = env_bool("POINTS_ALLOW_NEGATIVE_BALANCE")
POINTS_ALLOW_SELF_ACTION = env_bool("POINTS_ALLOW_SELF_ACTION")
POINTS_MIN_AMOUNT = int(os.getenv("POINTS_MIN_AMOUNT", "1"))
POINTS_MAX_AMOUNT = int(os.getenv("POINTS_MAX_AMOUNT", "10000"))

# Per-actor cooldown between successful add/remove calls
POINTS_COOLDOWN_SECONDS = float(os.getenv("POINTS_COOLDOWN_SECONDS", "3"))

# Identities are kept as strings (snowflake ids overflow doubles)
POINT_MANAGERS = env_list("POINT_MANAGERS")
SUPER_ADMINS = env_list("SUPER_ADMINS")

# Audit log: type/target/amount/actor/time only
AUDIT_LOG_ENABLED = env_bool("AUDIT_LOG_ENABLED", "1")
#######################


INSTALLED_APPS = [
	"django.contrib.admin",
	"django.contrib.auth",
	"django.contrib.contenttypes",
	"django.contrib.sessions",
	"django.contrib.messages",
	"django.contrib.staticfiles",
	# local apps
	"core.apps.CoreConfig",
	"api",
]


MIDDLEWARE = [
	"django.middleware.security.SecurityMiddleware",
	"django.contrib.sessions.middleware.SessionMiddleware",
	"django.middleware.common.CommonMiddleware",
	"django.middleware.csrf.CsrfViewMiddleware",
	"django.contrib.auth.middleware.AuthenticationMiddleware",
	"django.contrib.messages.middleware.MessageMiddleware",
]


ROOT_URLCONF = "staffpoints.urls"
TEMPLATES = [
	{
		"BACKEND": "django.template.backends.django.DjangoTemplates",
		"DIRS": [],
		"APP_DIRS": True,
		"OPTIONS": {
			"context_processors": [
				"django.template.context_processors.debug",
				"django.template.context_processors.request",
				"django.contrib.auth.context_processors.auth",
				"django.contrib.messages.context_processors.messages",
			],
		},
	},
]


WSGI_APPLICATION = "staffpoints.wsgi.application"


DB_ENGINE = os.getenv("DB_ENGINE", "sqlite")
if DB_ENGINE == "postgres":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("POSTGRES_DB", "staffpoints"),
            "USER": os.getenv("POSTGRES_USER", "staffpoints"),
            "PASSWORD": os.getenv("POSTGRES_PASSWORD", "staffpoints"),
            "HOST": os.getenv("POSTGRES_HOST", "localhost"),
            "PORT": os.getenv("POSTGRES_PORT", "5432"),
            "OPTIONS": {
                # statement timeout surfaces as StorageUnavailable instead of hanging a handler
                "options": f"-c statement_timeout={os.getenv('POSTGRES_STATEMENT_TIMEOUT_MS', '5000')}",
            },
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
            "OPTIONS": {
                # BEGIN IMMEDIATE takes the write lock up front; SQLite has no SELECT ... FOR UPDATE.
                # That lock covers the whole database, so mutations for different users queue
                # behind each other here. Deployments that need per-user writes to proceed in
                # parallel run DB_ENGINE=postgres, where select_for_update() locks only the row.
                "transaction_mode": "IMMEDIATE",
                "timeout": int(os.getenv("SQLITE_TIMEOUT_SECONDS", "20")),
            },
            # file-backed so threaded tests get real separate connections
            "TEST": {"NAME": BASE_DIR / "test_db.sqlite3"},
        }
    }


LOGGING = {
	"version": 1,
	"disable_existing_loggers": False,
	"formatters": {
		"standard": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
	},
	"handlers": {
		"console": {"class": "logging.StreamHandler", "formatter": "standard"},
	},
	"loggers": {
		"core": {"handlers": ["console"], "level": os.getenv("LOG_LEVEL", "INFO")},
		"api": {"handlers": ["console"], "level": os.getenv("LOG_LEVEL", "INFO")},
		"staffpoints.audit": {"handlers": ["console"], "level": "INFO"},
	},
}


AUTH_PASSWORD_VALIDATORS = []


LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True


STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
