import pytest

from config_loadr.core.builder import ConfigBuilder
from config_loadr.core.errors import (
    BuilderFinalizedError,
    ConfigurationFailed,
    InvalidEnvironment,
    MissingEnvVar,
    SchemaError,
)
from config_loadr.core.field import FieldOutcome, FieldSpec


def test_new_builder_is_empty_and_open() -> None:
    builder = ConfigBuilder(env={})

    assert builder.metadata == ()
    assert builder.errors == ()
    assert not builder.is_finalized
    assert builder.finish() == []


def test_required_captures_metadata() -> None:
    builder = ConfigBuilder(env={"TEST_KEY": "5"})

    assert builder.required("TEST_KEY", "Test description", 123) == 5
    (field,) = builder.metadata
    assert field.key == "TEST_KEY"
    assert field.description == "Test description"
    assert field.default_str == "123"
    assert field.required


def test_or_default_captures_metadata() -> None:
    builder = ConfigBuilder(env={})

    assert builder.or_default("PORT", "Server port", 8080) == 8080
    (field,) = builder.metadata
    assert field.default_str == "8080"
    assert not field.required


def test_optional_returns_none_when_unset() -> None:
    builder = ConfigBuilder(env={})

    assert builder.optional("TOKEN", "API token", "abc") is None
    assert builder.validate() == []
    assert builder.metadata[0].default_str == "abc"


def test_failed_field_returns_none_and_records_error() -> None:
    builder = ConfigBuilder(env={"PORT": "eighty"})

    assert builder.or_default("PORT", "Server port", 8080) is None
    assert builder.validate() == [InvalidEnvironment("PORT", "eighty", "Server port", "8080")]


def test_record_accepts_precomputed_outcome() -> None:
    builder = ConfigBuilder(env={})
    spec = FieldSpec.required("NAME", "Service name", "svc")

    assert builder.record(spec, FieldOutcome.success("given")) == "given"
    assert builder.validate() == []


def test_aggregation_is_ordered_and_does_not_short_circuit() -> None:
    env = {"B": "bad", "D": "4"}
    builder = ConfigBuilder(env=env)

    builder.required("A", "first", 1)
    builder.or_default("B", "second", 2)
    builder.optional("C", "third", "3", int)
    builder.required("D", "fourth", 4)
    builder.required("E", "fifth", 5)

    errors = builder.validate()
    assert [error.key for error in errors] == ["A", "B", "E"]
    assert isinstance(errors[0], MissingEnvVar)
    assert isinstance(errors[1], InvalidEnvironment)
    assert isinstance(errors[2], MissingEnvVar)
    assert [field.key for field in builder.metadata] == ["A", "B", "C", "D", "E"]


def test_validate_is_idempotent_and_non_consuming() -> None:
    builder = ConfigBuilder(env={})
    builder.required("A", "first", "x")
    metadata_before = builder.metadata

    first = builder.validate()
    second = builder.validate()

    assert first == second
    assert builder.metadata == metadata_before
    assert not builder.is_finalized
    first.clear()
    assert len(builder.validate()) == 1


def test_duplicate_key_is_rejected() -> None:
    builder = ConfigBuilder(env={})
    builder.or_default("PORT", "Server port", 8080)

    with pytest.raises(SchemaError):
        builder.or_default("PORT", "Server port again", 9090)
    assert len(builder.metadata) == 1


def test_finish_returns_errors_and_finalizes() -> None:
    builder = ConfigBuilder(env={})
    builder.required("A", "first", "x")

    errors = builder.finish()

    assert len(errors) == 1
    assert builder.is_finalized
    with pytest.raises(BuilderFinalizedError):
        builder.required("B", "second", "y")
    with pytest.raises(BuilderFinalizedError):
        builder.finish()
    # still inspectable after finalizing
    assert builder.validate() == errors
    assert len(builder.metadata) == 1


def test_finish_or_panic_succeeds_without_errors() -> None:
    builder = ConfigBuilder(env={"A": "x"})
    builder.required("A", "first", "example")

    builder.finish_or_panic()

    assert builder.is_finalized


def test_finish_or_panic_raises_with_every_error() -> None:
    builder = ConfigBuilder(env={"PORT": "not-a-number"})
    builder.required("NAME", "Service name", "svc")
    builder.or_default("PORT", "Server port", 8080)

    with pytest.raises(ConfigurationFailed) as excinfo:
        builder.finish_or_panic()

    message = str(excinfo.value)
    assert message.startswith("Configuration failed with 2 error(s):")
    assert message.index("NAME") < message.index("PORT")
    assert "Invalid value 'not-a-number'" in message
    assert [error.key for error in excinfo.value.errors] == ["NAME", "PORT"]
    assert builder.is_finalized


def test_reads_process_environment_by_default(config_env) -> None:
    config_env(BUILDER_TEST_NAME="from-env")
    builder = ConfigBuilder()

    assert builder.required("BUILDER_TEST_NAME", "Name", "x") == "from-env"


def test_render_docs_after_failure() -> None:
    builder = ConfigBuilder(env={})
    builder.required("A", "first", "x")
    builder.optional("B", "second")

    assert builder.validate()
    rendered = builder.render_docs()

    assert "| A | Yes | first | x |" in rendered
    assert "| B | No | second | - |" in rendered
    assert len(builder.rows()) == 2
