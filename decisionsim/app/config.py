"""Default settings; override with DECISIONSIM_* environment variables."""


class DefaultConfig:
    DEFAULT_HORIZON_MONTHS = 60
    MAX_HORIZON_MONTHS = 600

    # seed for the investment-noise generator; None draws fresh entropy per request
    RANDOM_SEED = None

    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # None means <instance_path>/decisionsim.db
    DATABASE_PATH = None

    LOG_LEVEL = "INFO"
