# Usage: gunicorn -c gunicorn_conf.py main:app
import os


def env_setting(name, default, cast=str):
    """Environment override; blank or unparsable values keep the default"""
    value = os.environ.get(name, '').strip()
    if not value:
        return default
    try:
        return cast(value)
    except ValueError:
        return default


bind = f"0.0.0.0:{env_setting('PORT', 3000, int)}"

# SQLite serializes writers; registrations are manual so two sync workers suffice
workers = env_setting('GUNICORN_WORKERS', 2, int)
worker_class = 'sync'
keepalive = env_setting('GUNICORN_KEEPALIVE', 5, int)
timeout = env_setting('GUNICORN_TIMEOUT', 60, int)
graceful_timeout = env_setting('GUNICORN_GRACEFUL_TIMEOUT', 30, int)

# Access and error logs go to the console alongside app.logger output
accesslog = '-'
errorlog = '-'
loglevel = env_setting('GUNICORN_LOGLEVEL', 'info')

# Bodies are capped by MAX_CONTENT_LENGTH in create_app; this bounds headers only
limit_request_line = 4094
limit_request_fields = 50

# Run the schema upgrade once in the master before forking workers
preload_app = True
