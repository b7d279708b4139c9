from pydantic import validator
from pydantic_settings import BaseSettings
from typing import Optional, Dict, Any, List


class Settings(BaseSettings):
    # Storage
    DATA_DIR: str = "data"
    DATA_FILE: Optional[str] = None

    @validator("DATA_FILE", pre=True, always=True)
    def assemble_data_file(cls, v: Optional[str], values: Dict[str, Any]) -> Any:
        if isinstance(v, str) and v:
            return v
        return f"{values.get('DATA_DIR', 'data')}/tokens.json"

    # API
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 3001
    API_URL: Optional[str] = None
    CORS_ORIGINS: List[str] = ["*"]

    @validator("API_URL", pre=True, always=True)
    def assemble_api_url(cls, v: Optional[str], values: Dict[str, Any]) -> Any:
        if isinstance(v, str) and v:
            return v.rstrip("/")
        return f"http://{values.get('API_HOST')}:{values.get('API_PORT')}"

    # Query view
    RESET_PAGE_ON_SEARCH: bool = False  # Source behaviour keeps the page and relies on clamping

    # Client
    HTTP_TIMEOUT: float = 30.0
    HTTP_CONNECT_TIMEOUT: float = 10.0

    # Monitoring
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    SERVICE_VERSION: str = "1.0.0"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
