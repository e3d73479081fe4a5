"""
Tests for environment configuration, logging setup and template rendering.
"""
import logging

from rest_schema import FieldType, ListField, ObjectField, ScalarField, Schema
from rest_schema.config import RestSchemaConfig
from rest_schema.file_io.template_renderer import TemplateRenderer, flatten_description
from rest_schema.utils.logging_utils import PACKAGE_LOGGER_NAME


class TestConfig:
    def test_defaults(self, monkeypatch):
        for name in ("REST_SCHEMA_LOG_LEVEL", "REST_SCHEMA_PRINT_LEVEL", "REST_SCHEMA_CACHE_ENABLED"):
            monkeypatch.delenv(name, raising=False)
        config = RestSchemaConfig.from_env()
        assert config.log_level == "INFO"
        assert config.print_level == "ERROR"
        assert config.cache_enabled is True

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("REST_SCHEMA_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("REST_SCHEMA_PRINT_LEVEL", "WARNING")
        monkeypatch.setenv("REST_SCHEMA_CACHE_ENABLED", "false")
        config = RestSchemaConfig.from_env()
        assert config.log_level == "DEBUG"
        assert config.print_level == "WARNING"
        assert config.cache_enabled is False

    def test_set_logging_splits_streams(self, capsys):
        logger = RestSchemaConfig(log_level="DEBUG", print_level="WARNING").set_logging()
        assert logger.name == PACKAGE_LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        logging.getLogger(f"{PACKAGE_LOGGER_NAME}.test").info("to stdout")
        logging.getLogger(f"{PACKAGE_LOGGER_NAME}.test").warning("to stderr")
        captured = capsys.readouterr()
        assert "to stdout" in captured.out
        assert "to stdout" not in captured.err
        assert "to stderr" in captured.err
        assert "to stderr" not in captured.out

    def test_set_logging_is_idempotent(self):
        config = RestSchemaConfig()
        config.set_logging()
        logger = config.set_logging()
        assert len(logger.handlers) == 2


class TestTemplateRenderer:
    def test_flatten_description(self):
        schema = Schema({
            "name": ScalarField(FieldType.STRING, True, "Name"),
            "friends": ListField(ObjectField({"id": ScalarField(FieldType.NUMBER, True)})),
        })
        rows = flatten_description(schema.describe_schema())
        assert [(r["path"], r["type"], r["required"]) for r in rows] == [
            ("name", "string", True),
            ("friends", "array", False),
            ("friends[]", "object", True),
            ("friends[].id", "number", True),
        ]

    def test_render_empty_schema(self):
        text = TemplateRenderer().render_schema_reference(Schema({}).describe_schema(), title="Empty")
        assert text.startswith("# Empty\n")
        assert "This schema declares no fields." in text

    def test_pipes_are_escaped(self):
        schema = Schema({"mode": ScalarField(FieldType.STRING, description="read|write")})
        text = TemplateRenderer().render_schema_reference(schema.describe_schema())
        assert "read\\|write" in text
