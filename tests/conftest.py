"""
Pytest Configuration and Fixtures

Provides shared fixtures for all tests.
"""

import json
import math
from pathlib import Path
from typing import Callable, List

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pricemodel.core.models import TrainingRecord  # noqa: E402

# Region center used throughout the tests (SE20 7UA)
CENTER_LAT = 51.405312
CENTER_LON = -0.062353


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).resolve().parent.parent


@pytest.fixture(scope="function")
def test_config(tmp_path: Path, monkeypatch):
    """Configuration pointing every path at a temporary data directory.

    Yields:
        Config object configured for testing.
    """
    data_dir = tmp_path / "property-model"
    monkeypatch.setenv("PRICEMODEL_DATA_DIR", str(data_dir))
    monkeypatch.setenv("PRICEMODEL_ONSPD_PATH", str(tmp_path / "postcodes" / "ONSPD.csv"))
    monkeypatch.setenv("PRICEMODEL_CENTER_LAT", str(CENTER_LAT))
    monkeypatch.setenv("PRICEMODEL_CENTER_LON", str(CENTER_LON))
    monkeypatch.setenv("PRICEMODEL_RADIUS_KM", "5")
    monkeypatch.setenv("PRICEMODEL_ALLOWED_AREAS", "SE,BR")
    monkeypatch.setenv("PRICEMODEL_LOG_LEVEL", "DEBUG")

    # Reset config singleton
    from pricemodel.config import reset_config, get_config
    reset_config()

    config = get_config()
    yield config

    # Cleanup
    reset_config()


@pytest.fixture(scope="function")
def make_record() -> Callable[..., TrainingRecord]:
    """Factory for TrainingRecords with sensible defaults."""

    def _make(**overrides) -> TrainingRecord:
        price = overrides.pop("price", 250000.0)
        fields = {
            "id": "{TEST-0001}",
            "price": price,
            "log_price": math.log(price),
            "date": "2023-05-12",
            "year": 2023,
            "month": 5,
            "postcode": "SE20 7UA",
            "outcode": "SE20",
            "property_type": "S",
            "new_build": False,
            "tenure": "F",
            "district": "BROMLEY",
            "distance_km": 0.5,
            "hpi_index": 150.0,
            "planning_count_12m": 0,
        }
        fields.update(overrides)
        return TrainingRecord(**fields)

    return _make


@pytest.fixture(scope="function")
def synthetic_records(make_record) -> List[TrainingRecord]:
    """Sixty records with a known log-linear price structure."""
    outcodes = ["BR3", "SE20", "SE26"]
    types = ["D", "S", "T", "F", "O"]
    type_effect = {"D": 0.4, "S": 0.2, "T": 0.1, "F": -0.2, "O": 0.0}
    records = []
    for i in range(60):
        outcode = outcodes[i % 3]
        prop_type = types[i % 5]
        distance = 0.5 + (i % 7) * 0.6
        year = 2019 + (i % 5)
        log_price = 12.3 + type_effect[prop_type] - 0.03 * distance + 0.02 * (year - 2019)
        price = math.exp(log_price)
        records.append(make_record(
            id=f"{{TXN-{i:04d}}}",
            price=price,
            log_price=math.log(price),
            date=f"{year}-{(i % 12) + 1:02d}-15",
            year=year,
            month=(i % 12) + 1,
            outcode=outcode,
            postcode=f"{outcode} {i % 9}AA",
            property_type=prop_type,
            new_build=(i % 4 == 0),
            tenure="L" if prop_type == "F" else "F",
            distance_km=distance,
            hpi_index=140.0 + (year - 2019) * 5,
            planning_count_12m=i % 3,
        ))
    return records


def ppd_line(
    txn_id: str,
    price: str,
    date: str,
    postcode: str,
    property_type: str = "S",
    new_build: str = "N",
    tenure: str = "F",
    district: str = "BROMLEY",
    status: str = "A",
) -> str:
    """One Price Paid CSV line in the published column order."""
    fields = [
        txn_id, price, date, postcode, property_type, new_build, tenure,
        "12", "", "HIGH STREET", "", "LONDON", district, "GREATER LONDON", "A", status,
    ]
    return ",".join(f'"{value}"' for value in fields)


@pytest.fixture(scope="function")
def source_files(test_config):
    """Write a minimal set of source files for the configured region.

    Three postcodes: one inside the radius and allowed area, one in an
    allowed area but outside the radius, and one close by in a
    disallowed area. One active sale per postcode.
    """
    paths = test_config.paths

    onspd = Path(paths.onspd_path)
    onspd.parent.mkdir(parents=True, exist_ok=True)
    onspd.write_text(
        "pcds,lat,long,doterm\n"
        "SE20 7UA,51.4100,-0.0600,\n"
        "SE1 9GF,51.5045,-0.0865,\n"
        "CR0 1AA,51.4000,-0.0700,\n"
        "SE20 8ZZ,51.4060,-0.0610,201001\n",
        encoding="utf-8",
    )

    paths.ppd_dir.mkdir(parents=True, exist_ok=True)
    (paths.ppd_dir / "pp-2023.csv").write_text(
        "\n".join([
            ppd_line("{A-1}", "250000", "2023-05-12 00:00", "SE20 7UA"),
            ppd_line("{A-2}", "250000", "2023-05-12 00:00", "SE1 9GF", district="SOUTHWARK"),
            ppd_line("{A-3}", "250000", "2023-05-12 00:00", "CR0 1AA", district="CROYDON"),
        ]) + "\n",
        encoding="utf-8",
    )

    paths.ukhpi_dir.mkdir(parents=True, exist_ok=True)
    (paths.ukhpi_dir / "ukhpi-bromley-2020-01-01-to-2024-01-01.csv").write_text(
        "Date,Index\n2023-03-01,148.5\n2023-04-01,150.0\n",
        encoding="utf-8",
    )

    paths.planning_path.parent.mkdir(parents=True, exist_ok=True)
    paths.planning_path.write_text(
        json.dumps([
            {"postcode": "SE20 7UA", "receivedDate": "2023-06-01"},
            {"postcode": "SE20 7UA", "receivedDate": "01/07/2023"},
            {"postcode": "SE20 1AB", "receivedDate": "2023-08-01"},
            {"postcode": "SE20 7UA", "receivedDate": "2020-01-01"},
        ]),
        encoding="utf-8",
    )

    return test_config


@pytest.fixture(scope="session")
def ppd_row() -> Callable[..., str]:
    """The ppd_line() helper, as a fixture."""
    return ppd_line
