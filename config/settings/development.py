# config/settings/development.py

from .base import *

# === DEVELOPMENT ===

DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '0.0.0.0']

# === DATABASE ===

# Local PostgreSQL from base.py; keep connections open between requests
DATABASES['default'].setdefault('CONN_MAX_AGE', 60)

# SQLite only when explicitly requested
if env('USE_SQLITE', cast=bool, default=False):
    print("🔄 Using SQLite for development")
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'taskboard.sqlite3',
        }
    }
else:
    print(f"🐘 Using PostgreSQL: {DATABASES['default']['NAME']}@{DATABASES['default']['HOST']}")

# === LOGGING ===

# Service and socket traffic at DEBUG on the console
LOGGING['handlers']['console']['level'] = 'DEBUG'
LOGGING['loggers']['apps']['level'] = 'DEBUG'

# === CACHE & CHANNEL LAYER ===

# Redis is optional in development: fall back to process-local backends
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'taskboard-dev-cache',
    }
}
CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer'
    }
}

if env('REDIS_URL', default=None):
    import redis

    try:
        redis.from_url(env('REDIS_URL')).ping()
    except redis.RedisError as e:
        print(f"⚠️  Redis not available ({e}), sockets only reach clients of this process")
    else:
        CACHES['default'] = {
            'BACKEND': 'django_redis.cache.RedisCache',
            'LOCATION': env('REDIS_URL'),
            'OPTIONS': {
                'CLIENT_CLASS': 'django_redis.client.DefaultClient',
            }
        }
        CHANNEL_LAYERS['default'] = {
            'BACKEND': 'channels_redis.core.RedisChannelLayer',
            'CONFIG': {
                'hosts': [env('REDIS_URL')],
            },
        }
        print("🔴 Redis connected, broadcasts shared across processes")

print("🚀 DEVELOPMENT settings loaded")
