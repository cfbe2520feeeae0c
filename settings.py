"""
Runtime configuration for the portfolio service.

Everything is read from the environment once at import time.
"""

import os

# ==========
# Persistence
# ==========
STORAGE_BACKEND = os.getenv("PORTFOLIO_STORAGE", "remote").strip().lower()
DOCUMENT_URL = os.getenv(
    "PORTFOLIO_DOCUMENT_URL",
    "https://saravanan-ravi-portfolio-default-rtdb.firebaseio.com/data.json",
)
# Empty means in-memory only
LOCAL_STORAGE_PATH = os.getenv("PORTFOLIO_LOCAL_STORAGE_PATH", "")
SAVE_DELAY_SECONDS = float(os.getenv("PORTFOLIO_SAVE_DELAY", "1.0"))
HTTP_TIMEOUT_SECONDS = float(os.getenv("PORTFOLIO_HTTP_TIMEOUT", "10"))

# ==================
# External endpoints
# ==================
CHAT_WEBHOOK_URL = os.getenv(
    "CHAT_WEBHOOK_URL",
    "https://theintellect.app.n8n.cloud/webhook/77261bb3-f417-4219-b1d0-03f961b895be",
)
CONTACT_FORM_URL = os.getenv("CONTACT_FORM_URL", "https://formspree.io/f/YOUR_FORM_ID_HERE")

# ===============
# Auth / Security
# ===============
SECRET_KEY = os.getenv("JWT_SECRET", "super-secret-key-change")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 12

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin@511")
# Either a precomputed pbkdf2_sha256 hash or a plain password hashed at startup
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH", "")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "Pw@2000")

# ====
# Misc
# ====
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
