"""
Centralized configuration — all env vars, lead statuses, platforms.
"""
import os


# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FORMAT = os.getenv('LOG_FORMAT', 'text')

# ── Flask ────────────────────────────────────────────────────────────────────
SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-change-me')

# ── Lead store ───────────────────────────────────────────────────────────────
# "sql" talks to DATABASE_URL through SQLAlchemy, "supabase" to the REST API.
STORE_BACKEND = os.getenv('STORE_BACKEND', 'sql')
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///local.db')
SUPABASE_URL = os.getenv('SUPABASE_URL')
SUPABASE_KEY = os.getenv('SUPABASE_KEY')
SUPABASE_TABLE = os.getenv('SUPABASE_TABLE', 'leads')
STORE_TIMEOUT = float(os.getenv('STORE_TIMEOUT', '15'))

# ── Collection job ───────────────────────────────────────────────────────────
COLLECTOR_URL = os.getenv('COLLECTOR_URL', 'http://127.0.0.1:8000')
# Unset means wait for the job as long as it takes.
COLLECTOR_TIMEOUT = float(os.getenv('COLLECTOR_TIMEOUT')) if os.getenv('COLLECTOR_TIMEOUT') else None
COLLECTOR_PLATFORMS = [
    p.strip() for p in os.getenv('COLLECTOR_PLATFORMS', 'reddit,facebook').split(',') if p.strip()
]

# ── Slack notifications ──────────────────────────────────────────────────────
SLACK_WEBHOOK_URL = os.getenv('SLACK_WEBHOOK_URL')

# ── Lead workflow ────────────────────────────────────────────────────────────
LEAD_STATUSES = [
    'new',
    'approved',
    'rejected',
    'contacted',
]

# Filter selector order as shown in the console
FILTER_ALL = 'all'
FILTER_OPTIONS = ['new', 'approved', 'contacted', 'rejected', FILTER_ALL]
DEFAULT_FILTER = 'new'
