import pytest

from invcore.analysis import (
    classify_stability,
    detect_anomaly,
    enrich_all,
    enrich_with_analytics,
    linear_regression,
    standard_deviation,
)


class TestLinearRegression:
    def test_slope_and_next_value(self):
        slope, _, next_value = linear_regression([1, 2, 3, 4, 5])
        assert slope == pytest.approx(1.0)
        assert next_value == pytest.approx(6.0)

    def test_predicts_next_step(self):
        _, _, next_value = linear_regression([10, 20, 30, 40])
        assert next_value == pytest.approx(50)

    def test_constant_series(self):
        slope, intercept, next_value = linear_regression([5, 5, 5, 5])
        assert slope == pytest.approx(0)
        assert intercept == pytest.approx(5)
        assert next_value == pytest.approx(5)

    def test_degenerate_inputs(self):
        assert linear_regression([]) == (0.0, 0.0, 0.0)
        assert linear_regression([4]) == (0.0, 4.0, 4.0)


def test_population_standard_deviation():
    assert standard_deviation([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)
    assert standard_deviation([]) == 0
    assert standard_deviation([1, 3], mean=0) == pytest.approx(5 ** 0.5)


class TestDetectAnomaly:
    def test_outlier_as_last_point(self):
        assert detect_anomaly([10] * 9 + [100]) is True

    def test_outlier_not_last(self):
        assert detect_anomaly([100] + [10] * 9) is False

    def test_too_short_or_flat(self):
        assert detect_anomaly([1, 1, 1, 50]) is False
        assert detect_anomaly([3] * 8) is False


class TestEnrich:
    def test_increasing_series_forecasts_next_step(self, make_record):
        record = enrich_with_analytics(make_record(hist_daily=[1, 2, 3, 4, 5, 6, 7], vtar_total=28))
        assert record.forecast == pytest.approx(8)
        assert record.is_anomaly is False

    def test_constant_series(self, make_record):
        record = enrich_with_analytics(make_record(hist_daily=[5] * 10, vtar_total=5))
        assert record.forecast == pytest.approx(5)
        assert record.is_anomaly is False
        assert record.std_dev == 0
        assert record.cv == 0
        assert record.stability == "Stable"

    def test_recent_outlier_is_flagged(self, make_record):
        flagged = enrich_with_analytics(make_record(hist_daily=[10] * 9 + [100], vtar_total=190))
        older = enrich_with_analytics(make_record(hist_daily=[100] + [10] * 9, vtar_total=190))
        assert flagged.is_anomaly is True
        assert older.is_anomaly is False

    def test_forecast_is_never_negative(self, make_record):
        record = enrich_with_analytics(make_record(hist_daily=[7, 6, 5, 4, 3, 2, 1, 0], vtar_total=28))
        assert record.forecast == 0

    def test_short_series_has_no_forecast(self, make_record):
        record = enrich_with_analytics(make_record(hist_daily=[1, 2, 3, 4, 50], vtar_total=60))
        assert record.forecast == 0
        assert record.is_anomaly is False
        assert record.stability != ""

    def test_empty_series_is_no_data(self, make_record):
        record = enrich_with_analytics(make_record(hist_daily=[], vtar_total=100))
        assert record.stability == "No-data"
        assert record.cv == 0

    def test_inactive_when_no_demand(self, make_record):
        record = enrich_with_analytics(make_record(hist_daily=[0] * 7, vtar_total=0))
        assert record.stability == "Inactive"
        assert record.cv == 0

    def test_cv_uses_total_demand(self, make_record):
        # sigma is centred on the series mean (5.0), not on vtar_total
        record = enrich_with_analytics(make_record(hist_daily=[2, 4, 4, 4, 5, 5, 7, 9], vtar_total=4))
        assert record.std_dev == pytest.approx(2.0)
        assert record.cv == pytest.approx(0.5)
        assert record.stability == "Variable"


@pytest.mark.parametrize(
    "total, cv, expected",
    [
        (0, 0.0, "Inactive"),
        (10, 0.29, "Stable"),
        (10, 0.3, "Variable"),
        (10, 0.69, "Variable"),
        (10, 0.7, "Erratic"),
    ],
)
def test_classify_stability(total, cv, expected):
    assert classify_stability(total, cv) == expected


def test_enrich_all_counts_anomalies(make_record):
    records = [
        make_record("A", hist_daily=[10] * 9 + [100], vtar_total=190),
        make_record("B", hist_daily=[5] * 10, vtar_total=50),
    ]
    assert enrich_all(records) == 1
    assert records[1].stability == "Stable"
