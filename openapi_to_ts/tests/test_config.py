import pytest

from openapi_to_ts.pipeline.config import CodeGeneratorConfig, OutputConfig, OutputMode
from openapi_to_ts.pipeline.errors import FormatError
from openapi_to_ts.pipeline.loader import FileLoader, MemoryLoader, parse_document


def test_config_defaults():
    config = CodeGeneratorConfig()
    assert config.use_enums is False
    assert config.namespace is None
    assert config.generate_api is True
    assert config.output == OutputConfig(mode=OutputMode.ERROR_IF_EXISTS, atomic_write=True)


def test_config_from_dict_round_trip():
    data = {
        "use_enums": True,
        "namespace": "Types",
        "add_generation_comment": False,
        "generate_api": False,
        "types_file_name": "models.ts",
        "api_file_name": "client.ts",
        "output": {"mode": "force", "atomic_write": False},
    }
    config = CodeGeneratorConfig.from_dict(data)

    assert config.output.mode is OutputMode.FORCE
    assert config.to_dict() == data


def test_config_ignores_unknown_keys():
    config = CodeGeneratorConfig.from_dict({"unknown": 1, "use_enums": True})
    assert config.use_enums is True
    assert not hasattr(config, "unknown")


def test_parse_document_accepts_json():
    assert parse_document('{"openapi": "3.0.0"}') == {"openapi": "3.0.0"}


@pytest.mark.parametrize("text", ["", "- a\n- b\n", "just text"])
def test_parse_document_requires_a_mapping(text):
    with pytest.raises(FormatError):
        parse_document(text, "broken.yaml")


def test_loaders(tmp_path):
    (tmp_path / "models").mkdir()
    (tmp_path / "models" / "user.yaml").write_text("components: {}\n")

    assert FileLoader(tmp_path).load_text("models/user.yaml") == "components: {}\n"
    with pytest.raises(FileNotFoundError):
        FileLoader(tmp_path).load_text("missing.yaml")

    loader = MemoryLoader({"a.yaml": "x: 1"})
    assert loader.load_text("a.yaml") == "x: 1"
    with pytest.raises(FileNotFoundError):
        loader.load_text("b.yaml")
