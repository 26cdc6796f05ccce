"""Tests for hubgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from hubgen.config import ConfigError, GeneratorConfig, config_from_mapping, load_config


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".hubgen.yml"
    config_file.write_text(
        """
target_namespace: "Maps.Client"
target_class_name: "MapClient"
target_file_path: "Generated/MapClient.cs"
contract_source: "contracts/map.yml"
type_source_path: "Generated/Types.cs"
connection_property: "Connection"
member_visibility: "public"
client_method_suffix: "Received"
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert isinstance(config, GeneratorConfig)
    assert config.root == tmp_path.resolve()
    assert config.target_namespace == "Maps.Client"
    assert config.target_class_name == "MapClient"
    assert config.target_file_path == tmp_path.resolve() / "Generated" / "MapClient.cs"
    assert config.contract_source == str(tmp_path.resolve() / "contracts" / "map.yml")
    assert config.type_source_path == tmp_path.resolve() / "Generated" / "Types.cs"
    assert config.connection_property == "Connection"
    assert config.member_visibility == "public"
    assert config.client_method_suffix == "Received"


def test_optional_fields_have_defaults(tmp_path: Path) -> None:
    config = config_from_mapping(
        {
            "target_namespace": "Game",
            "target_class_name": "GameClient",
            "target_file_path": "GameClient.cs",
            "contract_source": "game.contracts",
        },
        root=tmp_path,
    )

    assert config.type_source_path is None
    assert config.connection_property == "HubConnection"
    assert config.member_visibility == "protected"
    assert config.client_method_suffix == "On"
    assert config.contract_source == "game.contracts"


def test_legacy_json_keys_are_accepted(tmp_path: Path) -> None:
    config_file = tmp_path / "settings.json"
    config_file.write_text(
        """
{
  "TargetNamespace": "Game",
  "TargetClassName": "GameClient",
  "TargetFilePath": "out/GameClient.cs",
  "TypeSourceCsPath": "out/Types.cs",
  "SourceAssemblyPath": "contract.py"
}
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.target_namespace == "Game"
    assert config.target_file_path == tmp_path.resolve() / "out" / "GameClient.cs"
    assert config.type_source_path == tmp_path.resolve() / "out" / "Types.cs"
    assert config.contract_source == str(tmp_path.resolve() / "contract.py")


def test_absolute_paths_are_kept(tmp_path: Path) -> None:
    output = tmp_path / "elsewhere" / "Client.cs"

    config = config_from_mapping(
        {
            "target_namespace": "Game",
            "target_class_name": "GameClient",
            "target_file_path": str(output),
            "contract_source": "game.contracts",
        },
        root=tmp_path / "project",
    )

    assert config.target_file_path == output


def test_missing_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path)


def test_empty_config_file_raises(tmp_path: Path) -> None:
    (tmp_path / ".hubgen.yml").write_text("  \n", encoding="utf-8")

    with pytest.raises(ConfigError, match="empty"):
        load_config(tmp_path)


def test_non_mapping_config_raises(tmp_path: Path) -> None:
    (tmp_path / ".hubgen.yml").write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    (tmp_path / ".hubgen.yml").write_text("target_namespace: [oops\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_missing_required_settings_are_listed(tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as excinfo:
        config_from_mapping({"target_namespace": "Game"}, root=tmp_path)

    message = str(excinfo.value)
    assert "target_class_name" in message
    assert "target_file_path" in message
    assert "contract_source" in message
    assert "target_namespace" not in message


def test_unknown_visibility_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="member_visibility"):
        config_from_mapping(
            {
                "target_namespace": "Game",
                "target_class_name": "GameClient",
                "target_file_path": "GameClient.cs",
                "contract_source": "game.contracts",
                "member_visibility": "friend",
            },
            root=tmp_path,
        )
