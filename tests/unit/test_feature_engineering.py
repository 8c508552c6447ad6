"""
Unit tests for feature_engineering module.
"""

import numpy as np
import pytest

from pricemodel.core.models import FeatureSchema
from pricemodel.exceptions import InsufficientDataError
from pricemodel.ml.feature_engineering import (
    NUMERIC_FEATURES,
    build_feature_names,
    compute_scaling,
    encode,
    encode_matrix,
    encode_values,
    fit_schema,
)


class TestFeatureNames:
    """Tests for feature ordering."""

    def test_order(self):
        names = build_feature_names(["BR3", "SE20", "SE26"])
        assert names == [
            "intercept",
            "type_D", "type_S", "type_T", "type_F",
            "newBuild", "leasehold",
            "distanceKm", "distanceKm2", "hpiIndex", "planningCount12m", "saleYear",
            "outcode_SE20", "outcode_SE26",
        ]

    def test_single_outcode_has_no_dummy(self):
        assert not any(n.startswith("outcode_") for n in build_feature_names(["SE20"]))


class TestFitSchema:
    """Tests for fit_schema function."""

    def test_outcodes_sorted_with_baseline(self, synthetic_records):
        schema = fit_schema(synthetic_records)
        assert schema.outcodes == ["BR3", "SE20", "SE26"]
        assert schema.base_outcode == "BR3"
        assert len(schema.feature_names) == 14
        assert schema.numeric_feature_names == NUMERIC_FEATURES

    def test_empty(self):
        with pytest.raises(InsufficientDataError):
            fit_schema([])

    def test_scaling_is_population_std(self, make_record):
        records = [make_record(distance_km=1.0), make_record(distance_km=3.0)]
        scaling = compute_scaling(records)
        assert scaling["distanceKm"].mean == pytest.approx(2.0)
        assert scaling["distanceKm"].std == pytest.approx(1.0)
        assert scaling["distanceKm2"].mean == pytest.approx(5.0)

    def test_constant_feature_floor(self, make_record):
        scaling = compute_scaling([make_record(), make_record()])
        assert scaling["hpiIndex"].std == pytest.approx(1e-6)

    def test_schema_dict_round_trip(self, synthetic_records):
        schema = fit_schema(synthetic_records)
        data = schema.to_dict()
        assert data["typeBaseline"] == "O"
        assert data["baseOutcode"] == "BR3"
        assert FeatureSchema.from_dict(data) == schema


class TestEncode:
    """Tests for record encoding."""

    def test_vector_length_and_indicators(self, synthetic_records, make_record):
        schema = fit_schema(synthetic_records)
        record = make_record(
            property_type="F", tenure="L", new_build=True, outcode="SE26", postcode="SE26 1AA"
        )
        vector = encode(record, schema)
        values = dict(zip(schema.feature_names, vector))

        assert len(vector) == len(schema.feature_names)
        assert values["intercept"] == 1.0
        assert values["type_F"] == 1.0
        assert values["type_D"] == values["type_S"] == values["type_T"] == 0.0
        assert values["newBuild"] == 1.0
        assert values["leasehold"] == 1.0
        assert values["outcode_SE26"] == 1.0
        assert values["outcode_SE20"] == 0.0

    def test_other_type_is_reference(self, synthetic_records, make_record):
        schema = fit_schema(synthetic_records)
        values = dict(zip(schema.feature_names, encode(make_record(property_type="O"), schema)))
        assert all(values[f"type_{c}"] == 0.0 for c in "DSTF")

    def test_baseline_outcode_all_zero(self, synthetic_records, make_record):
        schema = fit_schema(synthetic_records)
        values = dict(zip(schema.feature_names, encode(make_record(outcode="BR3"), schema)))
        assert values["outcode_SE20"] == values["outcode_SE26"] == 0.0

    def test_unseen_outcode_all_zero(self, synthetic_records, make_record):
        schema = fit_schema(synthetic_records)
        vector = encode(make_record(outcode="SE19"), schema)
        assert len(vector) == len(schema.feature_names)
        assert vector[-2:].tolist() == [0.0, 0.0]

    def test_numeric_features_standardized(self, synthetic_records):
        schema = fit_schema(synthetic_records)
        matrix = encode_matrix(synthetic_records, schema)
        start = schema.feature_names.index("distanceKm")
        numeric = matrix[:, start:start + len(NUMERIC_FEATURES)]
        np.testing.assert_allclose(numeric.mean(axis=0), 0.0, atol=1e-9)
        np.testing.assert_allclose(numeric.std(axis=0), 1.0, atol=1e-9)

    def test_constant_feature_encodes_zero(self, make_record):
        records = [make_record(id=str(i), distance_km=0.5 + i) for i in range(3)]
        schema = fit_schema(records)
        values = dict(zip(schema.feature_names, encode(records[0], schema)))
        assert values["hpiIndex"] == 0.0

    def test_encode_values_missing_names(self, synthetic_records):
        schema = fit_schema(synthetic_records)
        vector = encode_values(schema, {"intercept": 1.0})
        assert vector[0] == 1.0
        assert not vector[1:].any()

    def test_empty_matrix(self, synthetic_records):
        schema = fit_schema(synthetic_records)
        assert encode_matrix([], schema).shape == (0, len(schema.feature_names))
