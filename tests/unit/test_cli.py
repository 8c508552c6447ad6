"""
Unit tests for the command line entry points.
"""

import json
import sys

import pytest

from pricemodel.cli import build_dataset, derive_region, predict, train_model


def _run(monkeypatch, module, *args):
    monkeypatch.setattr(sys, "argv", [module.__name__, *args])
    module.main()


class TestCli:
    """End-to-end runs of each command."""

    def test_derive_region(self, monkeypatch, source_files, capsys):
        _run(monkeypatch, derive_region)
        assert source_files.paths.region_path.exists()
        assert "SE20" in capsys.readouterr().out

    def test_build_train_predict(self, monkeypatch, source_files, capsys):
        _run(monkeypatch, build_dataset, "--as-of", "2024-01-01")
        assert "Included: 1" in capsys.readouterr().out

        _run(monkeypatch, train_model, "--split", "random", "--lambda", "1")
        assert source_files.paths.model_path.exists()
        capsys.readouterr()

        _run(monkeypatch, predict, "--postcode", "SE20 7UA", "--property-type", "s", "--json")
        out = capsys.readouterr().out
        result = json.loads(out[out.index("{\n"):])
        assert result["estimate"] > 0
        assert result["inputs"]["propertyType"] == "S"

    def test_predict_outside_region(self, monkeypatch, source_files, capsys):
        _run(monkeypatch, build_dataset, "--as-of", "2024-01-01")
        _run(monkeypatch, train_model)
        capsys.readouterr()

        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, predict, "--postcode", "SE1 9GF")
        assert exc_info.value.code == 2

    def test_predict_without_model(self, monkeypatch, test_config, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, predict, "--postcode", "SE20 7UA", "--json")
        assert exc_info.value.code == 1
        last_line = capsys.readouterr().out.strip().splitlines()[-1]
        assert "error" in json.loads(last_line)

    def test_build_dataset_bad_date(self, monkeypatch, test_config):
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, build_dataset, "--as-of", "whenever")
        assert exc_info.value.code == 2

    def test_train_without_dataset(self, monkeypatch, test_config):
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, train_model)
        assert exc_info.value.code == 1

    def test_relative_data_dir_resolved_from_project_root(self, monkeypatch, test_config, project_root):
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, build_dataset, "--data-dir", "no-such-model-dir")
        assert exc_info.value.code == 1
        assert test_config.paths.data_dir == str(project_root / "no-such-model-dir")

    def test_relative_onspd_path_resolved_from_project_root(self, monkeypatch, test_config, project_root):
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, derive_region, "--onspd-path", "no-such-dir/ONSPD.csv")
        assert exc_info.value.code == 1
        assert test_config.paths.onspd_path == str(project_root / "no-such-dir" / "ONSPD.csv")
