from pathlib import Path

# Repo-root conventional directories/files (overrideable via engine.yaml)
CONFIG_DIR = Path("configs")
ENGINE_FILE = CONFIG_DIR / "engine.yaml"
TAXONOMY_DIR = CONFIG_DIR / "taxonomy"
GEOGRAPHY_FILENAME = "geography.yaml"
INDUSTRY_FILENAME = "industry.yaml"

LOG_DIR = Path("logs")

# Session context environment variables
ENV_TOKEN = "SELLER_TOKEN"
ENV_ROLE = "SELLER_ROLE"
ENV_USER_ID = "SELLER_ID"
