import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "compliance_db"),
}

ENGINE_CONFIG = {
    "max_workers": int(os.getenv("TREND_MAX_WORKERS", "16")),
    "low_threshold": int(os.getenv("LOW_COMPLIANCE_THRESHOLD", "80")),
    "low_limit": int(os.getenv("LOW_COMPLIANCE_LIMIT", "10")),
    "default_geofence_radius": float(os.getenv("DEFAULT_GEOFENCE_RADIUS_M", "50")),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
