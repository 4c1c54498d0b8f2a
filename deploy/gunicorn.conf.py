# Gunicorn configuration for POE2 Temple Analyzer
# Run from analyzer-python/: gunicorn -c ../deploy/gunicorn.conf.py server:app

import os

# Bind to localhost - nginx will proxy
bind = os.environ.get('BIND', "127.0.0.1:5000")

# Workers - each worker keeps its own analysis cache
workers = int(os.environ.get('WEB_CONCURRENCY', 2))

# Threads - analyses are short; the server serializes cache access
threads = 4

# Worker class - gthread for threaded workers
worker_class = "gthread"

# Timeout - analysis is milliseconds, decoding large links a bit more
timeout = 30

# Keep-alive
keepalive = 5

# Logging - use /dev/stdout for local testing, files for production
if os.path.exists('/var/log/temple-analyzer'):
    accesslog = "/var/log/temple-analyzer/access.log"
    errorlog = "/var/log/temple-analyzer/error.log"
else:
    accesslog = "-"
    errorlog = "-"
loglevel = os.environ.get('LOG_LEVEL', "info")

# Process naming
proc_name = "temple-analyzer"

# Graceful timeout
graceful_timeout = 30

# Max requests per worker before restart
max_requests = 10000
max_requests_jitter = 1000
