# catalogo/config/settings.py
# Loads environment variables and defines the application configuration.

from dataclasses import dataclass, field
from typing import Optional, List
from dotenv import load_dotenv
import os
import logging
import sys
from urllib.parse import quote_plus # Para senhas na URL

# Determine the project root directory dynamically
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
dotenv_path = os.path.join(PROJECT_ROOT, '.env')
load_dotenv(dotenv_path=dotenv_path)

VALID_DB_TYPES = ('POSTGRES', 'SQLITE', 'MEMORY')

def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ('true', '1', 'yes')

@dataclass
class Config:
    """
    Application configuration loaded from environment variables.
    Provides type hints and default values.
    """
    # Flask Settings
    APP_HOST: str = field(default_factory=lambda: os.environ.get('APP_HOST', '0.0.0.0'))
    APP_PORT: int = field(default_factory=lambda: int(os.environ.get('APP_PORT', 5000)))
    APP_DEBUG: bool = field(default_factory=lambda: _env_bool('APP_DEBUG', 'False'))
    LOG_LEVEL: str = field(default_factory=lambda: os.environ.get('LOG_LEVEL', 'INFO').upper())
    LOG_DIRECTORY: str = field(default_factory=lambda: os.environ.get('LOG_DIRECTORY', os.path.join(PROJECT_ROOT, 'logs')))
    CORS_ORIGINS: List[str] = field(default_factory=lambda: [o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()])

    # --- Database Settings ---
    DB_TYPE: str = field(default_factory=lambda: os.environ.get('DB_TYPE', 'SQLITE').upper())

    # PostgreSQL Specific Settings (read from .env)
    POSTGRES_HOST: str = field(default_factory=lambda: os.environ.get('POSTGRES_HOST', 'localhost'))
    POSTGRES_PORT: int = field(default_factory=lambda: int(os.environ.get('POSTGRES_PORT', 5432)))
    POSTGRES_USER: str = field(default_factory=lambda: os.environ.get('POSTGRES_USER', ''))
    POSTGRES_PASSWORD: str = field(default_factory=lambda: os.environ.get('POSTGRES_PASSWORD', ''))
    POSTGRES_DB: str = field(default_factory=lambda: os.environ.get('POSTGRES_DB', ''))

    # SQLite file path (relative to PROJECT_ROOT when not absolute)
    DATABASE_PATH: str = field(default_factory=lambda: os.environ.get('DATABASE_PATH', 'data/catalogo.db'))

    # Popula categorias e produtos de exemplo quando o banco está vazio
    SEED_DATA: bool = field(default_factory=lambda: _env_bool('SEED_DATA', 'True'))

    # --- SQLAlchemy Database URL ---
    # Constructed based on the DB_TYPE and specific settings
    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    def __post_init__(self):
        # Validate log level
        valid_levels = list(logging._nameToLevel.keys())
        if self.LOG_LEVEL not in valid_levels:
             print(f"Warning: Invalid LOG_LEVEL '{self.LOG_LEVEL}'. Valid levels: {valid_levels}. Defaulting to INFO.", file=sys.stderr)
             self.LOG_LEVEL = 'INFO'

        if self.SQLALCHEMY_DATABASE_URI:
            # URI explícita tem precedência (ex.: testes)
            return

        # --- Build SQLAlchemy Database URI ---
        if self.DB_TYPE == 'POSTGRES':
            if not all([self.POSTGRES_HOST, self.POSTGRES_USER, self.POSTGRES_PASSWORD, self.POSTGRES_DB]):
                print("Warning: Missing PostgreSQL connection details in environment variables. Database connection will likely fail.", file=sys.stderr)
                self.SQLALCHEMY_DATABASE_URI = None
            else:
                 encoded_password = quote_plus(self.POSTGRES_PASSWORD)
                 self.SQLALCHEMY_DATABASE_URI = f"postgresql+psycopg://{self.POSTGRES_USER}:{encoded_password}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        elif self.DB_TYPE == 'SQLITE':
             db_path = self.DATABASE_PATH
             if db_path:
                  abs_path = os.path.join(PROJECT_ROOT, db_path) if not os.path.isabs(db_path) else db_path
                  os.makedirs(os.path.dirname(abs_path), exist_ok=True)
                  self.SQLALCHEMY_DATABASE_URI = f"sqlite:///{abs_path}"
             else:
                  print("Warning: DB_TYPE is SQLITE but DATABASE_PATH is not set.", file=sys.stderr)
                  self.SQLALCHEMY_DATABASE_URI = None
        elif self.DB_TYPE == 'MEMORY':
             self.SQLALCHEMY_DATABASE_URI = "sqlite://"
        else:
             print(f"Warning: Unsupported DB_TYPE '{self.DB_TYPE}'. Valid options: {VALID_DB_TYPES}. No database URI configured.", file=sys.stderr)
             self.SQLALCHEMY_DATABASE_URI = None

# Singleton instance, created by load_config
_config_instance: Optional[Config] = None

def load_config() -> Config:
    """Loads or returns the singleton Config instance."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance

def describe_config(cfg: Config) -> List[str]:
    """Linhas descritivas da configuração, com a senha do banco mascarada."""
    db_uri_log = str(cfg.SQLALCHEMY_DATABASE_URI)
    if cfg.POSTGRES_PASSWORD:
         db_uri_log = db_uri_log.replace(quote_plus(cfg.POSTGRES_PASSWORD), '********')
    return [
        f"APP_HOST: {cfg.APP_HOST}",
        f"APP_PORT: {cfg.APP_PORT}",
        f"APP_DEBUG: {cfg.APP_DEBUG}",
        f"LOG_LEVEL: {cfg.LOG_LEVEL}",
        f"DB_TYPE: {cfg.DB_TYPE}",
        f"SQLALCHEMY_DATABASE_URI: {db_uri_log}",
        f"SEED_DATA: {cfg.SEED_DATA}",
    ]

# Expose the singleton instance directly
config = load_config()

# Helper to get PROJECT_ROOT if needed elsewhere
def get_project_root() -> str:
    return PROJECT_ROOT
