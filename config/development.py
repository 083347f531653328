import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "compliance_db"),
}

ENGINE_CONFIG = {
    "max_workers": int(os.getenv("TREND_MAX_WORKERS", "8")),
    "low_threshold": int(os.getenv("LOW_COMPLIANCE_THRESHOLD", "80")),
    "low_limit": int(os.getenv("LOW_COMPLIANCE_LIMIT", "10")),
    "default_geofence_radius": float(os.getenv("DEFAULT_GEOFENCE_RADIUS_M", "50")),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
