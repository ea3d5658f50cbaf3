import os

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "insecure-dev-key")
DEBUG = os.environ.get("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "*").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "server.portfolio_sim",
]

MIDDLEWARE = [
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "server.urls"
DATABASES = {}
USE_TZ = True

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "UNAUTHENTICATED_USER": None,
}

# passed to folio_core.io.config.simulator_config_from_mapping
FOLIO_SIM = {
    "default_cycles": int(os.environ.get("FOLIO_SIM_CYCLES", 15000)),
    "default_years": int(os.environ.get("FOLIO_SIM_YEARS", 15)),
    "workers": int(os.environ.get("FOLIO_SIM_WORKERS", 1)) or None,  # 0 = all cores
    "timeout_seconds": float(os.environ.get("FOLIO_SIM_TIMEOUT", 60)),
}
