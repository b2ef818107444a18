from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # App
    ENV: str = "development"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Remote bills store (REST API)
    STORE_API_URL: str = "http://localhost:5678"
    STORE_API_TOKEN: str | None = None
    STORE_API_TIMEOUT: float = 10.0  # Timeout w sekundach

    # Receipts
    ALLOWED_RECEIPT_EXTENSIONS: list[str] = ["jpg", "jpeg", "png"]
    RECEIPT_MODAL_RATIO: float = 0.5  # Szerokość obrazka względem modala

    model_config = {
        "env_file": ".env",
        "extra": "ignore"
    }

settings = Settings()
