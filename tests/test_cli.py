"""
Tests for the command-line interface.
"""

import json
import subprocess
import sys

import pytest

from sweepcad.io.loaders import load_config_json, save_config_json


def _run(*args):
    return subprocess.run(
        [sys.executable, "-m", "sweepcad.cli.generate", *args],
        capture_output=True,
        text=True,
    )


class TestCLIEntryPoints:
    """Test that CLI entry points defined in pyproject.toml are importable."""

    def test_entry_point_importable(self):
        from sweepcad.cli.generate import main
        assert callable(main)

    def test_entry_point_via_subprocess(self):
        result = _run("--help")
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()
        assert "--validate-only" in result.stdout


class TestCLIBasic:
    """Basic CLI tests (no geometry built)."""

    def test_list(self):
        result = _run("--list")
        assert result.returncode == 0
        for name in ("rocket_engine", "functional_rocket_engine", "sculpted_rocket_engine", "fluid_manifold"):
            assert name in result.stdout

    def test_validate_preset(self):
        result = _run("functional_rocket_engine", "--validate-only")
        assert result.returncode == 0
        assert "FunctionalRocketEngine" in result.stdout

    def test_unknown_preset(self):
        result = _run("warp_drive", "--validate-only")
        assert result.returncode == 1
        assert "Valid presets" in result.stderr

    def test_missing_config(self):
        result = _run("--config", "nonexistent.json", "--validate-only")
        assert result.returncode == 1
        assert "not found" in result.stderr

    def test_invalid_json(self, tmp_path):
        invalid_file = tmp_path / "invalid.json"
        invalid_file.write_text("not valid json {")
        result = _run("--config", str(invalid_file), "--validate-only")
        assert result.returncode == 1
        assert "Error" in result.stderr

    def test_requires_model_or_config(self):
        result = _run()
        assert result.returncode != 0

    def test_model_and_config_exclusive(self, tmp_path):
        result = _run("rocket_engine", "--config", str(tmp_path / "x.json"))
        assert result.returncode != 0

    def test_save_json(self, tmp_path):
        out = tmp_path / "manifold.json"
        result = _run("fluid_manifold", "--validate-only", "--save-json", str(out))
        assert result.returncode == 0
        assert load_config_json(out).name == "FluidManifold"

    def test_validation_errors_block_generation(self, tmp_path, rocket_config):
        data = json.loads(rocket_config.model_dump_json())
        data["cooling"]["depth_max_mm"] = 4.5
        config_file = tmp_path / "deep.json"
        config_file.write_text(json.dumps(data))

        result = _run("--config", str(config_file), "-o", str(tmp_path))
        assert result.returncode == 1
        assert "CHANNEL_BREACHES_FLOW" in result.stderr
        assert not (tmp_path / "RocketEngine.stl").exists()

    def test_validate_custom_config(self, tmp_path, manifold_config):
        config_file = tmp_path / "manifold.json"
        save_config_json(manifold_config, config_file)
        result = _run("--config", str(config_file), "--validate-only", "-q")
        assert result.returncode == 0


class TestCLIGenerate:

    @pytest.mark.slow
    def test_generate_coarse_manifold(self, tmp_path, coarse_manifold):
        config_file = tmp_path / "coarse.json"
        save_config_json(coarse_manifold, config_file)
        result = _run("--config", str(config_file), "-o", str(tmp_path / "out"))
        assert result.returncode == 0, result.stderr
        assert (tmp_path / "out" / "FluidManifold.stl").exists()
        assert (tmp_path / "out" / "FluidManifold_CrossSection.stl").exists()

    def test_geometry_failure_reported(self, tmp_path, monkeypatch, capsys, rocket_config):
        """A broken boolean result ends the run with an error, not a traceback."""
        from sweepcad.cli.generate import main
        from sweepcad.core import assembly
        from sweepcad.core.kernel import GeometryError

        class FailingGeometry:
            config = rocket_config

            def build(self):
                raise GeometryError("Stage '-channels' left 3 separate solids; expected one connected body")

        monkeypatch.setattr(assembly, "geometry_for", lambda config: FailingGeometry())

        assert main(["rocket_engine", "-o", str(tmp_path)]) == 1
        assert "geometry build failed" in capsys.readouterr().err
        assert not (tmp_path / "RocketEngine.stl").exists()
