SECRET_KEY = "rail-access-tests"
DEBUG = False
USE_TZ = True

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.sessions",
    "rail_access",
]

MIDDLEWARE = [
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "rail_access.middleware.AccessContextMiddleware",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "rail_access.context_processors.access",
            ],
        },
    }
]

POLICIES = {
    "viewer": {"can": ["doc.read"]},
    "editor": {"can": ["doc.write"], "inherits": ["viewer"]},
    "admin": {"can": "*"},
}

RAIL_ACCESS = {
    "access_settings": {
        "policies": POLICIES,
        "superuser_roles": ["admin"],
    },
}
