import logging
import os
import sys
from concurrent_log_handler import ConcurrentRotatingFileHandler
from typing import Optional

# --- Configuração ---
LOG_DIRECTORY_DEFAULT = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), "logs")
LOG_FILENAME_BASE = "catalogo.log"  # Nome base do arquivo de log
LOG_LEVEL_DEFAULT = "INFO"  # Nível de log padrão
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d | %(funcName)s] - %(message)s'
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 10

def _resolve_level(level_str: str) -> int:
    numeric_level = getattr(logging, level_str.upper(), None)
    if not isinstance(numeric_level, int):
        print(f"Aviso: Nível de log inválido '{level_str}'. Usando INFO por padrão.", file=sys.stderr)
        return logging.INFO
    return numeric_level

class Logger:
    """Encapsula a configuração do logger usando ConcurrentRotatingFileHandler."""
    _instance = None
    _logger = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(Logger, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, name: str = "CatalogoAPI", log_level: Optional[str] = None, log_directory: Optional[str] = None):
        if self._initialized:
            return

        # Determinar nível e diretório de log
        level_str = log_level
        directory = log_directory
        if level_str is None or directory is None:
            try:
                from catalogo.config import config  # Importação atrasada para evitar dependências circulares
                level_str = level_str or config.LOG_LEVEL
                directory = directory or config.LOG_DIRECTORY
            except ImportError:
                level_str = level_str or LOG_LEVEL_DEFAULT
                directory = directory or LOG_DIRECTORY_DEFAULT

        self._logger = logging.getLogger(name)
        self._logger.setLevel(_resolve_level(level_str))

        if not self._logger.handlers:
            formatter = logging.Formatter(LOG_FORMAT)

            # Console
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            self._logger.addHandler(console_handler)

            # Arquivo (ConcurrentRotatingFileHandler)
            try:
                os.makedirs(directory, exist_ok=True)
                log_file_path = os.path.join(directory, LOG_FILENAME_BASE)

                file_handler = ConcurrentRotatingFileHandler(
                    filename=log_file_path,
                    mode='a',
                    maxBytes=LOG_MAX_BYTES,
                    backupCount=LOG_BACKUP_COUNT,
                    encoding='utf-8',
                )
                file_handler.setFormatter(formatter)
                self._logger.addHandler(file_handler)
            except OSError as e:
                print(f"Erro ao configurar log de arquivo: {e}", file=sys.stderr)

        self._initialized = True

    def get_logger(self) -> logging.Logger:
        """Retorna a instância do logger configurado."""
        if not self._logger:
            raise RuntimeError("Logger não foi inicializado.")
        return self._logger

# Instância global do logger
logger_instance = Logger()
logger = logger_instance.get_logger()

def configure_logger(level: str):
    """Reconfigura o nível global do logger."""
    logger.setLevel(_resolve_level(level))
    logger.debug(f"Nível de log ajustado para {level.upper()}.")
