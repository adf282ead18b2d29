import json

import pytest

from receipt_splitter.core.config import DEFAULT_SETTINGS, charge_config_from_settings, load_settings
from receipt_splitter.core.models import ChargeConfig, DistributionMode


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "nope.json", env={})
    assert settings["tax_percent"] == 8.5
    assert settings["tip_percent"] == 15.0
    assert settings["service_percent"] == 0.0
    assert settings["confidence_threshold"] == 60.0
    assert settings["max_people"] == 8


def test_file_values_override_defaults(tmp_path):
    path = tmp_path / "split_settings.json"
    path.write_text(json.dumps({"tax_percent": 8.875, "tip_distribution": "equal"}), encoding="utf-8")

    settings = load_settings(path, env={})
    config = charge_config_from_settings(settings)
    assert config.tax_percent == 8.875
    assert config.tip_distribution is DistributionMode.EQUAL
    assert config.tax_distribution is DistributionMode.PROPORTIONAL


def test_env_overrides_file(tmp_path):
    path = tmp_path / "split_settings.json"
    path.write_text(json.dumps({"tip_percent": 18}), encoding="utf-8")

    settings = load_settings(path, env={"SPLIT_TIP_PERCENT": "20", "TESSERACT_CMD": "/opt/tesseract"})
    assert settings["tip_percent"] == 20.0
    assert settings["tesseract_cmd"] == "/opt/tesseract"


def test_keyword_overrides_win_and_none_is_ignored():
    config = charge_config_from_settings(dict(DEFAULT_SETTINGS), tax_percent=10, tip_percent=None,
                                         tax_distribution="equal")
    assert config.tax_percent == 10
    assert config.tip_percent == 15
    assert config.tax_distribution is DistributionMode.EQUAL


def test_unknown_setting_is_rejected(tmp_path):
    path = tmp_path / "split_settings.json"
    path.write_text(json.dumps({"tax": 5}), encoding="utf-8")
    with pytest.raises(ValueError, match="Unknown setting"):
        load_settings(path, env={})


def test_non_numeric_setting_is_rejected():
    with pytest.raises(ValueError, match="tax_percent"):
        load_settings(None, env={"SPLIT_TAX_PERCENT": "lots"})


def test_charge_config_validation():
    with pytest.raises(ValueError):
        ChargeConfig(tax_percent=-1)
    with pytest.raises(ValueError):
        ChargeConfig(tip_distribution="by-weight")


@pytest.mark.parametrize("value", [float("nan"), float("inf"), "nan"])
def test_charge_config_rejects_non_finite(value):
    with pytest.raises(ValueError, match="service_percent"):
        ChargeConfig(service_percent=value)


def test_non_finite_env_override_is_rejected_by_charge_config():
    settings = load_settings(None, env={"SPLIT_TIP_PERCENT": "nan"})
    with pytest.raises(ValueError, match="tip_percent"):
        charge_config_from_settings(settings)
