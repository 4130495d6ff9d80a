from unittest import mock

import pytest

from osal_typegen.build import main, workspace_config_path


def test_workspace_config_path(tmp_path):
    manifest = tmp_path / "outer" / "ws" / "osal-rs"
    expected = tmp_path / "outer" / "inc" / "hhg-config" / "pico" / "FreeRTOSConfig.h"
    assert workspace_config_path(manifest) == expected


def test_workspace_config_path_accepts_string(tmp_path):
    manifest = tmp_path / "a" / "b"
    assert workspace_config_path(str(manifest)).parts[-4:] == (
        "inc",
        "hhg-config",
        "pico",
        "FreeRTOSConfig.h",
    )


@pytest.mark.parametrize("manifest", ["/", "/only", "single"])
def test_workspace_config_path_without_root(manifest):
    with pytest.raises(ValueError):
        workspace_config_path(manifest)


def test_main_generates_types(monkeypatch, tmp_path, capsys):
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    monkeypatch.setenv("OUT_DIR", str(out_dir))
    monkeypatch.setenv("CARGO_MANIFEST_DIR", str(tmp_path / "ws" / "osal-rs"))
    with mock.patch("subprocess.run", side_effect=FileNotFoundError):
        assert main([]) == 0
    content = (out_dir / "types_generated.rs").read_text()
    assert "pub type TickType = u32;" in content
    out = capsys.readouterr().out
    assert "cargo:rerun-if-changed=build.rs" in out


def test_main_with_arguments(tmp_path, monkeypatch):
    monkeypatch.delenv("OUT_DIR", raising=False)
    monkeypatch.delenv("CARGO_MANIFEST_DIR", raising=False)
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    with mock.patch("subprocess.run", side_effect=FileNotFoundError):
        code = main(
            ["--manifest-dir", str(tmp_path / "a" / "b"), "--out-dir", str(out_dir)]
        )
    assert code == 0
    assert "pub type StackType = i32;" in (out_dir / "types_generated.rs").read_text()


def test_main_requires_manifest_dir(monkeypatch, tmp_path):
    monkeypatch.delenv("CARGO_MANIFEST_DIR", raising=False)
    monkeypatch.setenv("OUT_DIR", str(tmp_path))
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_main_requires_out_dir(monkeypatch, tmp_path):
    monkeypatch.delenv("OUT_DIR", raising=False)
    monkeypatch.setenv("CARGO_MANIFEST_DIR", str(tmp_path / "ws" / "osal-rs"))
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2