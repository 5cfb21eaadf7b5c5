from functools import lru_cache

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

load_dotenv()


class Settings(BaseSettings):
    """Process configuration, read from the environment (and .env)."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./leoaxis.db"

    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "qwen:latest"
    ollama_temperature: float = 0.7
    # Upper bound for the quiz advisor call; on expiry the templated recommendation is used.
    advisor_timeout_seconds: float = 20.0
    doubt_timeout_seconds: float = 60.0
    # When true, failing a quiz does not mark its topic complete.
    require_pass_to_progress: bool = False

    secret_key: str = "change-me-in-production"
    access_token_expire_minutes: int = 30

    log_level: str = "INFO"
    log_dir: str = "logs"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
engine = create_engine(settings.database_url, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def reset_db():
    Base.metadata.drop_all(bind=engine)
    print("Database dropped")
    create_db()


def create_db():
    # Model modules register their tables on Base when imported.
    import api.models.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    print("Database created")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
