"""Tests for the environment-driven Config dataclass."""

from catalogo.config import Config, describe_config


class TestDatabaseUri:

    def test_memoria(self):
        assert Config(DB_TYPE="MEMORY").SQLALCHEMY_DATABASE_URI == "sqlite://"

    def test_sqlite_com_caminho_absoluto(self, tmp_path):
        caminho = tmp_path / "dados" / "catalogo.db"
        config = Config(DB_TYPE="SQLITE", DATABASE_PATH=str(caminho))
        assert config.SQLALCHEMY_DATABASE_URI == f"sqlite:///{caminho}"
        assert caminho.parent.is_dir()

    def test_postgres_codifica_senha(self):
        config = Config(
            DB_TYPE="POSTGRES",
            POSTGRES_HOST="db",
            POSTGRES_PORT=5433,
            POSTGRES_USER="catalogo",
            POSTGRES_PASSWORD="s3nh@/forte",
            POSTGRES_DB="catalogo",
        )
        assert config.SQLALCHEMY_DATABASE_URI == "postgresql+psycopg://catalogo:s3nh%40%2Fforte@db:5433/catalogo"

    def test_postgres_incompleto(self):
        config = Config(DB_TYPE="POSTGRES", POSTGRES_USER="", POSTGRES_PASSWORD="", POSTGRES_DB="")
        assert config.SQLALCHEMY_DATABASE_URI is None

    def test_tipo_desconhecido(self):
        assert Config(DB_TYPE="ORACLE").SQLALCHEMY_DATABASE_URI is None

    def test_uri_explicita_tem_precedencia(self):
        config = Config(DB_TYPE="POSTGRES", SQLALCHEMY_DATABASE_URI="sqlite:///:memory:")
        assert config.SQLALCHEMY_DATABASE_URI == "sqlite:///:memory:"


class TestOutros:

    def test_nivel_de_log_invalido_vira_info(self):
        assert Config(LOG_LEVEL="VERBOSE", DB_TYPE="MEMORY").LOG_LEVEL == "INFO"

    def test_describe_config_mascara_senha(self):
        config = Config(
            DB_TYPE="POSTGRES",
            POSTGRES_USER="catalogo",
            POSTGRES_PASSWORD="segredo",
            POSTGRES_DB="catalogo",
        )
        linhas = "\n".join(describe_config(config))
        assert "segredo" not in linhas
        assert "********" in linhas
