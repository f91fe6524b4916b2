from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"
    BUSINESS_NAME: str = "Brutal Soul"

    # Locales del negocio (clave de partición de todos los registros)
    LOCATIONS: str = "Brutal Soul,Stella Brutal"

    # Record store: "sql" (SQLAlchemy) o "json" (un fichero por tabla)
    STORE_BACKEND: str = "sql"
    DATABASE_URL: str = "sqlite+aiosqlite:///./cuadrante.db"
    DATA_DIR: str = "./data"

    # Ficheros subidos (documentos, nóminas)
    MEDIA_DIR: str = "./media"
    MEDIA_URL: str = "/media"

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",")]

    @property
    def locations(self) -> list[str]:
        return [loc.strip() for loc in self.LOCATIONS.split(",") if loc.strip()]

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
