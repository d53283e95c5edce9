"""Tests for relpack.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from relpack.core.config import (
    ArchiveFormat,
    ConfigError,
    PackageConfig,
    archive_name,
    env_overrides,
    load_config_file,
    load_package_config,
)
from relpack.core.result import Err, Ok


def _complete(**changes: object) -> PackageConfig:
    base = PackageConfig(
        crate_name="conwayste",
        tag="v1.2.3",
        target="x86_64-unknown-linux-gnu",
        package="conwayste",
    )
    return base.merged(changes)


class TestArchiveName:
    @pytest.mark.parametrize(
        ("crate", "tag", "target"),
        [
            ("conwayste", "v1.2.3", "x86_64-unknown-linux-gnu"),
            ("my-tool", "0.1.0-rc.1", "x86_64-pc-windows-msvc"),
            ("a", "b", "c"),
        ],
    )
    def test_exact_concatenation(self, crate: str, tag: str, target: str) -> None:
        assert archive_name(crate, tag, target) == crate + "-" + tag + "-" + target + ".tar.gz"

    def test_zip_format(self) -> None:
        name = archive_name("conwayste", "v1", "x86_64-pc-windows-msvc", ArchiveFormat.ZIP)
        assert name == "conwayste-v1-x86_64-pc-windows-msvc.zip"

    def test_config_property(self) -> None:
        assert _complete().archive_name == "conwayste-v1.2.3-x86_64-unknown-linux-gnu.tar.gz"


class TestArchiveFormat:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("tar.gz", ArchiveFormat.TAR_GZ),
            (".tar.gz", ArchiveFormat.TAR_GZ),
            ("tgz", ArchiveFormat.TAR_GZ),
            ("ZIP", ArchiveFormat.ZIP),
        ],
    )
    def test_parse(self, raw: str, expected: ArchiveFormat) -> None:
        assert ArchiveFormat.parse(raw) is expected

    def test_parse_unknown(self) -> None:
        assert ArchiveFormat.parse("rar") is None


class TestPackageConfig:
    def test_defaults(self) -> None:
        config = PackageConfig()
        assert config.bin_name == "client"
        assert config.resources == ("resources",)
        assert config.lto is True
        assert config.toolchain == "cross"
        assert config.archive_format is ArchiveFormat.TAR_GZ
        assert config.target_dir == "target"

    def test_frozen(self) -> None:
        config = PackageConfig()
        with pytest.raises(AttributeError):
            config.tag = "v2"  # type: ignore[misc]

    def test_binary_name_follows_target(self) -> None:
        assert _complete().binary_name == "client"
        assert _complete(target="x86_64-pc-windows-msvc").binary_name == "client.exe"

    def test_validate_complete(self) -> None:
        config = _complete()
        assert config.validate() == Ok(config)

    def test_validate_reports_every_missing_input(self) -> None:
        result = PackageConfig(tag="v1").validate()
        assert isinstance(result, Err)
        assert result.error.missing == ("crate_name", "target", "package")
        assert result.error.hint is not None
        assert "CRATE_NAME" in result.error.hint

    def test_validate_treats_blank_as_missing(self) -> None:
        result = _complete(tag="   ").validate()
        assert isinstance(result, Err)
        assert result.error.missing == ("tag",)

    def test_validate_rejects_unknown_toolchain(self) -> None:
        result = _complete(toolchain="make").validate()
        assert isinstance(result, Err)
        assert "make" in result.error.message

    @pytest.mark.parametrize(
        "changes",
        [
            {"tag": "release/v1.2.3"},
            {"tag": "..\\v1"},
            {"crate_name": "../conwayste"},
            {"target": "x86_64/linux"},
        ],
    )
    def test_validate_rejects_path_separators(self, changes: dict[str, str]) -> None:
        result = _complete(**changes).validate()
        assert isinstance(result, Err)
        assert "path separator" in result.error.message

    def test_validate_accepts_dashed_tag_and_package(self) -> None:
        config = _complete(tag="v1.2.3-rc.1", package="conwayste-client")
        assert config.validate() == Ok(config)

    def test_merged_ignores_none(self) -> None:
        config = _complete()
        assert config.merged({"tag": None, "target": None}) is config
        assert config.merged({"tag": "v9"}).tag == "v9"


class TestFromDict:
    def test_full_table(self) -> None:
        config = PackageConfig.from_dict(
            {
                "release": {
                    "crate_name": "conwayste",
                    "package": "conwayste",
                    "bin": "server",
                    "resources": ["resources", "LICENSE"],
                    "lto": False,
                    "toolchain": "cargo",
                    "format": "zip",
                    "target_dir": "build",
                }
            }
        )
        assert config.crate_name == "conwayste"
        assert config.bin_name == "server"
        assert config.resources == ("resources", "LICENSE")
        assert config.lto is False
        assert config.toolchain == "cargo"
        assert config.archive_format is ArchiveFormat.ZIP
        assert config.target_dir == "build"

    def test_missing_table_gives_defaults(self) -> None:
        assert PackageConfig.from_dict({}) == PackageConfig()

    def test_empty_resources_list(self) -> None:
        config = PackageConfig.from_dict({"release": {"resources": []}})
        assert config.resources == ()

    def test_unknown_format_raises(self) -> None:
        with pytest.raises(ValueError, match="rar"):
            PackageConfig.from_dict({"release": {"format": "rar"}})

    @pytest.mark.parametrize(
        ("table", "key"),
        [
            ({"resources": ["assets", 7]}, "resources"),
            ({"resources": "assets"}, "resources"),
            ({"lto": "false"}, "lto"),
            ({"bin": 3}, "bin"),
            ({"tag": 1.2}, "tag"),
        ],
    )
    def test_wrong_value_type_raises(self, table: dict[str, object], key: str) -> None:
        with pytest.raises(TypeError, match=key):
            PackageConfig.from_dict({"release": table})

    def test_release_must_be_a_table(self) -> None:
        with pytest.raises(TypeError, match="release"):
            PackageConfig.from_dict({"release": "conwayste"})


class TestLoadConfigFile:
    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "release.toml"
        path.write_text('[release]\ncrate_name = "conwayste"\nbin = "client"\n', encoding="utf-8")

        result = load_config_file(path)

        assert isinstance(result, Ok)
        assert result.value.crate_name == "conwayste"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config_file(tmp_path / "nope.toml")
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "release.toml"
        path.write_text("[release\n", encoding="utf-8")

        result = load_config_file(path)

        assert isinstance(result, Err)
        assert isinstance(result.error, ConfigError)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_bad_format_value(self, tmp_path: Path) -> None:
        path = tmp_path / "release.toml"
        path.write_text('[release]\nformat = "rar"\n', encoding="utf-8")

        result = load_config_file(path)

        assert isinstance(result, Err)
        assert "Invalid config structure" in result.error.message

    def test_wrong_value_types_are_reported(self, tmp_path: Path) -> None:
        path = tmp_path / "release.toml"
        path.write_text('[release]\nresources = ["assets", 7]\nlto = "false"\n', encoding="utf-8")

        result = load_config_file(path)

        assert isinstance(result, Err)
        assert "Invalid config structure" in result.error.message
        assert "resources" in result.error.message
        assert result.error.path == path


class TestEnvOverrides:
    def test_reads_ci_variables(self) -> None:
        env = {
            "CRATE_NAME": "conwayste",
            "TRAVIS_TAG": "v1.2.3",
            "TARGET": "x86_64-unknown-linux-gnu",
            "BUILD_PACKAGE": "conwayste",
            "UNRELATED": "x",
        }
        assert env_overrides(env) == {
            "crate_name": "conwayste",
            "tag": "v1.2.3",
            "target": "x86_64-unknown-linux-gnu",
            "package": "conwayste",
        }

    def test_release_tag_wins_over_travis_tag(self) -> None:
        assert env_overrides({"RELEASE_TAG": "v2", "TRAVIS_TAG": "v1"}) == {"tag": "v2"}

    def test_blank_values_are_skipped(self) -> None:
        assert env_overrides({"RELEASE_TAG": " ", "TRAVIS_TAG": "v1"}) == {"tag": "v1"}
        assert env_overrides({"TARGET": ""}) == {}


class TestLoadPackageConfig:
    def test_layering_cli_over_env_over_file(self, tmp_path: Path) -> None:
        (tmp_path / "release.toml").write_text(
            '[release]\ncrate_name = "from-file"\npackage = "pkg"\ntag = "v0"\n',
            encoding="utf-8",
        )
        result = load_package_config(
            project_root=tmp_path,
            env={"CRATE_NAME": "from-env", "TARGET": "x86_64-apple-darwin", "TRAVIS_TAG": "v1"},
            overrides={"tag": "v2", "target": None},
        )

        assert isinstance(result, Ok)
        assert result.value.crate_name == "from-env"
        assert result.value.package == "pkg"
        assert result.value.tag == "v2"
        assert result.value.target == "x86_64-apple-darwin"

    def test_implicit_config_file_is_optional(self, tmp_path: Path) -> None:
        result = load_package_config(
            project_root=tmp_path,
            overrides={"crate_name": "c", "tag": "t", "target": "x", "package": "p"},
        )
        assert isinstance(result, Ok)

    def test_explicit_config_file_must_exist(self, tmp_path: Path) -> None:
        result = load_package_config(
            project_root=tmp_path,
            config_path=tmp_path / "missing.toml",
            overrides={"crate_name": "c", "tag": "t", "target": "x", "package": "p"},
        )
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_missing_inputs_fail_validation(self, tmp_path: Path) -> None:
        result = load_package_config(project_root=tmp_path, env={})
        assert isinstance(result, Err)
        assert result.error.missing == ("crate_name", "tag", "target", "package")

    def test_validation_can_be_skipped(self, tmp_path: Path) -> None:
        result = load_package_config(project_root=tmp_path, env={}, validate=False)
        assert result == Ok(PackageConfig())
