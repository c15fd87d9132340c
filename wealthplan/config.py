"""Default Flask configuration. Override with WEALTHPLAN_* environment variables."""


class DefaultConfig:
    CORS_ORIGINS = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    # None keeps slots in memory for the lifetime of the process
    DATABASE_PATH = None
