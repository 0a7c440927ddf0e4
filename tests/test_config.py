# -*- coding: utf-8 -*-
"""
Unit tests for config.py.
"""

import pytest

from config import (
    Config,
    CriterionType,
    MERECConfig,
    SummaryConfig,
    get_config,
    get_default_config,
    reset_config,
    set_config,
)
from weighting.exceptions import InvalidCriterionTypeError, InvalidParameterError


@pytest.fixture(autouse=True)
def _restore_config():
    yield
    reset_config()


class TestCriterionType:
    @pytest.mark.parametrize("raw", ["benefit", "BENEFIT", " Benefit "])
    def test_parse_benefit(self, raw):
        assert CriterionType.parse(raw) is CriterionType.BENEFIT

    def test_parse_member(self):
        assert CriterionType.parse(CriterionType.COST) is CriterionType.COST

    @pytest.mark.parametrize("raw", ["max", "", None, 1])
    def test_parse_invalid(self, raw):
        with pytest.raises(InvalidCriterionTypeError):
            CriterionType.parse(raw)


class TestMERECConfig:
    def test_defaults(self):
        cfg = MERECConfig()
        assert cfg.epsilon == 1e-10
        assert cfg.weight_tolerance == 1e-10

    @pytest.mark.parametrize("field_name", ["epsilon", "weight_tolerance"])
    @pytest.mark.parametrize("value", [0.0, -1.0, float("inf"), "x"])
    def test_validate_rejects(self, field_name, value):
        cfg = MERECConfig(**{field_name: value})
        with pytest.raises(InvalidParameterError):
            cfg.validate()


class TestConfig:
    def test_to_dict(self):
        d = get_default_config().to_dict()
        assert d["merec"]["epsilon"] == 1e-10
        assert d["logging"]["logger_name"] == "merec"
        assert d["summary"]["impact_thresholds"]["high"] == 40.0

    def test_describe_mentions_epsilon(self):
        assert "Epsilon" in get_default_config().describe()

    def test_summary_field_is_summary_config(self):
        cfg = Config()
        assert isinstance(cfg.summary, SummaryConfig)
        assert cfg.summary.importance_thresholds["very high"] == 30.0

    def test_summary_helpers_use_default_thresholds(self):
        from weighting.summary import impact_level, importance_level
        assert importance_level(0.35) == "very high"
        assert impact_level(25.0) == "medium"

    def test_invalid_merec_config_rejected(self):
        with pytest.raises(InvalidParameterError):
            Config(merec=MERECConfig(epsilon=-1.0))

    def test_set_and_reset(self):
        custom = Config(merec=MERECConfig(epsilon=1e-6))
        set_config(custom)
        assert get_config() is custom
        reset_config()
        assert get_config().merec.epsilon == 1e-10

    def test_calculator_reads_global_config(self):
        from weighting import MERECWeightCalculator
        set_config(Config(merec=MERECConfig(epsilon=1e-7)))
        assert MERECWeightCalculator().epsilon == 1e-7
