import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./app.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    SESSION_SECRET = data.get("SESSION_SECRET", "dev-session-secret-change-in-production")
    SESSION_TTL_MINUTES = int(data.get("SESSION_TTL_MINUTES", 60))
    SESSION_SWEEP_GRACE_MINUTES = int(data.get("SESSION_SWEEP_GRACE_MINUTES", 20))
    LOGIN_BODY_LIMIT = int(data.get("LOGIN_BODY_LIMIT", 512))
