"""
Unit tests for configuration loading.
"""

from pathlib import Path

from pricemodel.config import (
    PathsConfig,
    RegionConfig,
    TrainingConfig,
    get_config,
    reset_config,
    resolve_path,
)


class TestRegionConfig:
    """Tests for RegionConfig."""

    def test_defaults(self, monkeypatch):
        for name in ("PRICEMODEL_RADIUS_KM", "PRICEMODEL_ALLOWED_AREAS", "PRICEMODEL_CENTER_POSTCODE"):
            monkeypatch.delenv(name, raising=False)
        region = RegionConfig()
        assert region.center_postcode == "SE20 7UA"
        assert region.radius_km == 5.0
        assert region.allowed_areas == ["SE", "BR"]

    def test_areas_normalized(self, monkeypatch):
        monkeypatch.setenv("PRICEMODEL_ALLOWED_AREAS", " se , br ,,")
        assert RegionConfig().allowed_areas == ["SE", "BR"]

    def test_to_dict(self):
        region = RegionConfig(center_latitude=51.0, center_longitude=-0.1, radius_km=2.0, allowed_areas=["SE"])
        data = region.to_dict()
        assert data["radiusKm"] == 2.0
        assert data["allowedPostcodeAreas"] == ["SE"]
        assert data["center"]["latitude"] == 51.0


class TestTrainingConfig:
    """Tests for TrainingConfig."""

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PRICEMODEL_LAMBDA", "2.5")
        monkeypatch.setenv("PRICEMODEL_SPLIT", "TEMPORAL")
        monkeypatch.setenv("PRICEMODEL_SEED", "7")
        training = TrainingConfig()
        assert training.ridge_lambda == 2.5
        assert training.split_mode == "temporal"
        assert training.seed == 7

    def test_unknown_split_becomes_random(self, monkeypatch):
        monkeypatch.setenv("PRICEMODEL_SPLIT", "kfold")
        assert TrainingConfig().split_mode == "random"


class TestPathsConfig:
    """Tests for PathsConfig."""

    def test_derived_paths(self, tmp_path):
        paths = PathsConfig(data_dir=str(tmp_path), onspd_path=str(tmp_path / "onspd.csv"))
        assert paths.ppd_dir == tmp_path / "ppd"
        assert paths.ukhpi_dir == tmp_path / "ukhpi"
        assert paths.dataset_path == tmp_path / "training" / "transactions.jsonl"
        assert paths.model_path == tmp_path / "model.json"
        assert paths.planning_path.parent == tmp_path / "planning"

    def test_relative_paths_resolved(self):
        paths = PathsConfig(data_dir="data/property-model", onspd_path="data/postcodes/ONSPD.csv")
        assert Path(paths.data_dir).is_absolute()
        assert Path(paths.onspd_path).is_absolute()


class TestGetConfig:
    """Tests for the config singleton."""

    def test_singleton(self, test_config):
        assert get_config() is test_config

    def test_reset(self, test_config):
        reset_config()
        assert get_config() is not test_config


class TestResolvePath:
    """Tests for resolve_path function."""

    def test_relative(self, project_root):
        assert resolve_path("data/property-model") == str(project_root / "data" / "property-model")

    def test_absolute_unchanged(self, tmp_path):
        assert resolve_path(str(tmp_path)) == str(tmp_path)
