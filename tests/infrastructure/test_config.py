"""Tests for pos.ini loading."""

from decimal import Decimal
from pathlib import Path

import pytest

from pos.domain.exceptions import ConfigError
from pos.domain.model.order import PaymentStatus
from pos.infrastructure.config import (
    CONFIG_ENV,
    DATA_DIR_ENV,
    find_config_file,
    load_settings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    monkeypatch.chdir(tmp_path)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:

    def test_no_file_uses_defaults(self, tmp_path):
        settings = load_settings()
        assert settings.data_dir == (tmp_path / "data").resolve()
        assert settings.order_number_prefix == "MA"
        assert settings.payment_status == PaymentStatus.PAID
        assert settings.low_stock_threshold == 10
        assert settings.dashboard_low_stock_threshold == 5
        assert settings.cogs_ratio == Decimal("0.6")
        assert settings.top_customers_limit == 10
        assert settings.currency_symbol == "₹"
        assert settings.log_file is None
        assert settings.user.uid == "local"


class TestFileLoading:

    def test_values_from_file(self, tmp_path):
        config = _write(tmp_path / "shop.ini", (
            "[store]\ndata_dir = records\n"
            "[user]\nuid = shop-42\nemail = owner@example.com\n"
            "[orders]\nnumber_prefix = KL\npayment_status = pending\n"
            "[reports]\nlow_stock_threshold = 3\ncogs_ratio = 0.45\n"
            "[logging]\nlevel = debug\nfile = logs/pos.log\n"
        ))
        settings = load_settings(config)
        assert settings.data_dir == (tmp_path / "records").resolve()
        assert settings.user.uid == "shop-42"
        assert settings.order_number_prefix == "KL"
        assert settings.payment_status == PaymentStatus.PENDING
        assert settings.low_stock_threshold == 3
        assert settings.dashboard_low_stock_threshold == 5
        assert settings.cogs_ratio == Decimal("0.45")
        assert settings.log_level == "DEBUG"
        assert settings.log_file == (tmp_path / "logs" / "pos.log").resolve()

    def test_found_by_walking_up(self, tmp_path, monkeypatch):
        config = _write(tmp_path / "pos.ini", "[orders]\nnumber_prefix = UP\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert find_config_file().resolve() == config.resolve()
        assert load_settings().order_number_prefix == "UP"

    def test_env_var_points_at_file(self, tmp_path, monkeypatch):
        config = _write(tmp_path / "elsewhere.ini", "[orders]\nnumber_prefix = EV\n")
        monkeypatch.setenv(CONFIG_ENV, str(config))
        assert load_settings().order_number_prefix == "EV"

    def test_data_dir_env_overrides_file(self, tmp_path, monkeypatch):
        config = _write(tmp_path / "pos.ini", "[store]\ndata_dir = records\n")
        monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path / "override"))
        assert load_settings(config).data_dir == (tmp_path / "override").resolve()


class TestInvalidConfig:

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "missing.ini")

    @pytest.mark.parametrize(
        "body",
        [
            "[reports]\nlow_stock_threshold = many\n",
            "[reports]\ncogs_ratio = 1.5\n",
            "[reports]\ncogs_ratio = abc\n",
            "[orders]\npayment_status = maybe\n",
            "[orders]\npayment_status = partial\n",
            "[user]\nuid =\n",
        ],
    )
    def test_bad_values(self, tmp_path, body):
        config = _write(tmp_path / "pos.ini", body)
        with pytest.raises(ConfigError):
            load_settings(config)

    def test_unparseable_file(self, tmp_path):
        config = _write(tmp_path / "pos.ini", "no section header\n")
        with pytest.raises(ConfigError, match="Cannot parse"):
            load_settings(config)
