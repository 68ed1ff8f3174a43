from payroll_service.database.bootstrap import schema_statements
from payroll_service.database.connection import DBConfig
from payroll_service.main import SCHEMA_PATH


def test_schema_statements_skip_database_selection():
    sql = "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\nCREATE TABLE a (id INT);\n\nCREATE TABLE b (id INT);\n"

    assert schema_statements(sql) == ["CREATE TABLE a (id INT)", "CREATE TABLE b (id INT)"]


def test_bundled_schema_creates_every_table():
    statements = schema_statements(SCHEMA_PATH.read_text(encoding="utf-8"))

    created = [s.split("(")[0].split()[-1] for s in statements if s.upper().startswith("CREATE TABLE")]
    assert created == ["businesses", "salary_configs", "shifts", "employees", "payments", "attendance"]


def test_db_config_from_settings_keeps_defaults():
    config = DBConfig.from_dict({"host": "db", "port": "3307", "password": None})

    assert (config.host, config.port, config.user, config.password, config.database) == (
        "db",
        3307,
        "root",
        "",
        "payroll_db",
    )
    assert "database" not in config.connect_kwargs(with_database=False)
