# backend/app/core/config.py
"""
Este archivo contiene la configuración de la aplicación.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional
from pathlib import Path
import os

# Apunta al directorio 'backend/'
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic BaseSettings.
    Variables sensibles desde .env, defaults seguros para el resto.
    """
    # Configuración general del proyecto
    BASE_DIR: Path = BASE_DIR
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Marketplace API"
    PROJECT_VERSION: str = "0.1.0"

    # Configuración de la base de datos
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "postgres")
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "user")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "marketplace_db")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")

    # Permite apuntar a otra base (por ejemplo sqlite+aiosqlite en desarrollo)
    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    @property
    def DATABASE_URL(self) -> str:
        """URL de conexión a la base de datos asíncrona."""
        if self.SQLALCHEMY_DATABASE_URI:
            return self.SQLALCHEMY_DATABASE_URI
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Administradores iniciales (lista separada por comas de identidades)
    ADMIN_PRINCIPALS: str = ""

    # Reglas del catálogo
    ENFORCE_PRICE_FLOOR: bool = True
    SEED_DEFAULT_CATALOG: bool = True

    # Almacenamiento de imágenes (S3). Si falta el bucket se usa el almacén en memoria.
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_S3_BUCKET_NAME: Optional[str] = None
    AWS_S3_REGION: str = "us-east-1"
    BLOB_URL_EXPIRATION: int = 3600

    # URL pública de la API, usada para construir enlaces directos a blobs locales
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    # Stripe
    STRIPE_API_BASE: str = "https://api.stripe.com"
    STRIPE_TIMEOUT: float = 30.0

    # Logging - Defaults seguros
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE_PATH: Optional[str] = "logs/app.log"

    # App Info - Del .env con defaults
    APP_ENVIRONMENT: str = "development"

    # Server - Del .env con defaults
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @property
    def admin_principals(self) -> List[str]:
        """Identidades declaradas como administradores en el entorno."""
        return [p.strip() for p in self.ADMIN_PRINCIPALS.split(",") if p.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False

# Instancia global de la configuración
settings = Settings()
