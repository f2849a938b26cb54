"""Configuration handling: finding and parsing ``pos.ini``.

Every setting has a default, so the tool runs without a config file.
``POS_CONFIG`` points at an explicit file and ``POS_DATA_DIR`` overrides
the data directory regardless of what the file says.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from pos.domain.exceptions import ConfigError
from pos.domain.model.order import PaymentStatus
from pos.domain.model.user import UserIdentity

CONFIG_FILE_NAME = "pos.ini"
CONFIG_ENV = "POS_CONFIG"
DATA_DIR_ENV = "POS_DATA_DIR"

DEFAULTS = {
    "store": {"data_dir": "data"},
    "user": {"uid": "local", "email": "", "display_name": "Shop Owner"},
    "orders": {"number_prefix": "MA", "payment_status": "paid"},
    "reports": {
        "low_stock_threshold": "10",
        "dashboard_low_stock_threshold": "5",
        "cogs_ratio": "0.6",
        "top_customers_limit": "10",
    },
    "display": {"currency_symbol": "₹"},
    "logging": {"level": "INFO", "file": ""},
}


@dataclass(frozen=True)
class Settings:
    """Typed representation of ``pos.ini``."""

    data_dir: Path
    user: UserIdentity
    order_number_prefix: str
    payment_status: PaymentStatus
    low_stock_threshold: int
    dashboard_low_stock_threshold: int
    cogs_ratio: Decimal
    top_customers_limit: int
    currency_symbol: str
    log_level: str
    log_file: Path | None


def find_config_file(explicit_path: Path | None = None) -> Path | None:
    """Locate the configuration file.

    Order of precedence: ``explicit_path``, the ``POS_CONFIG`` environment
    variable, then the first ``pos.ini`` found walking up from the current
    working directory.  Returns None when there is no file at all.
    """
    if explicit_path is not None:
        return explicit_path
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path)

    current = Path.cwd()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.exists():
            return candidate
    return None


def read_config(config_path: Path | None) -> configparser.ConfigParser:
    parser = configparser.ConfigParser()
    parser.read_dict(DEFAULTS)
    if config_path is None:
        return parser

    config_path = config_path.expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")
    try:
        parser.read(config_path, encoding="utf-8")
    except configparser.Error as exc:
        raise ConfigError(f"Cannot parse {config_path}: {exc}") from exc
    return parser


def parse_settings(
    parser: configparser.ConfigParser, *, base_path: Path | None = None
) -> Settings:
    """Convert a ``ConfigParser`` into :class:`Settings`.

    Relative paths are anchored at ``base_path`` (the config file's
    directory) or the current working directory.
    """
    base_path = base_path or Path.cwd()
    try:
        data_dir = _resolve(os.environ.get(DATA_DIR_ENV) or parser.get("store", "data_dir"), base_path)
        log_file_raw = parser.get("logging", "file").strip()
        payment_status = PaymentStatus(parser.get("orders", "payment_status").strip().lower())
        cogs_ratio = Decimal(parser.get("reports", "cogs_ratio"))
        settings = Settings(
            data_dir=data_dir,
            user=UserIdentity(
                uid=parser.get("user", "uid"),
                email=parser.get("user", "email"),
                display_name=parser.get("user", "display_name"),
            ),
            order_number_prefix=parser.get("orders", "number_prefix").strip(),
            payment_status=payment_status,
            low_stock_threshold=parser.getint("reports", "low_stock_threshold"),
            dashboard_low_stock_threshold=parser.getint(
                "reports", "dashboard_low_stock_threshold"
            ),
            cogs_ratio=cogs_ratio,
            top_customers_limit=parser.getint("reports", "top_customers_limit"),
            currency_symbol=parser.get("display", "currency_symbol"),
            log_level=parser.get("logging", "level").strip().upper(),
            log_file=_resolve(log_file_raw, base_path) if log_file_raw else None,
        )
    except (configparser.Error, ValueError, InvalidOperation) as exc:
        raise ConfigError(f"Invalid configuration value: {exc}") from exc

    if settings.payment_status is PaymentStatus.PARTIAL:
        raise ConfigError("[orders] payment_status must be paid or pending")
    if not settings.user.uid.strip():
        raise ConfigError("[user] uid must not be empty")
    if not Decimal("0") <= settings.cogs_ratio <= Decimal("1"):
        raise ConfigError("[reports] cogs_ratio must be between 0 and 1")
    return settings


def load_settings(explicit_path: Path | None = None) -> Settings:
    config_path = find_config_file(explicit_path)
    parser = read_config(config_path)
    base_path = config_path.expanduser().resolve().parent if config_path else None
    return parse_settings(parser, base_path=base_path)


def _resolve(raw: str, base_path: Path) -> Path:
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = base_path / path
    return path.resolve()
