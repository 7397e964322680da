import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # Catalogue Settings
    library_name: str = os.getenv("LIBRARY_NAME", "Digital Library")
    library_capacity: int = int(os.getenv("LIBRARY_CAPACITY", "1000"))
    seed_sample_data: bool = os.getenv("SEED_SAMPLE_DATA", "True").lower() in ("true", "1", "yes")

    # Logging Settings
    log_level: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    # Application Settings
    app_name: str = os.getenv("APP_NAME", "Library Catalogue")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")


settings = Settings()
