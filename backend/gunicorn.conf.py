# Bind & workers
bind = "0.0.0.0:8000"
# The token registry lives in process memory: keep a single worker and scale
# with threads.
workers = 1
worker_class = "gthread"
threads = 8
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr
accesslog = "-"
errorlog = "-"
loglevel = "info"

# Proxy headers
forwarded_allow_ips = "*"
proxy_protocol = False

wsgi_app = "chatapp.wsgi:app"
