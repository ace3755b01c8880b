"""Configuration loading for ledgerkit.

Classification rules default to the built-in restaurant rule set. A YAML
file can override any top-level section; sections it leaves out keep their
defaults.

Example rules file::

    vendors:
      acme produce: {type: COST_OF_SALES, confidence: 0.9}
    keywords:
      - {keyword: flour, account: "5003000", type: COST_OF_SALES, confidence: 0.9}
    default_confidence: 0.55
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml

from ledgerkit.domain.classification import (
    DEFAULT_RULES,
    ClassificationRules,
    KeywordRule,
    VendorRule,
)
from ledgerkit.domain.account_types import parse_account_type
from ledgerkit.domain.errors import ValidationError

DB_PATH_ENV = "LEDGERKIT_DB_PATH"
RULES_PATH_ENV = "LEDGERKIT_RULES_PATH"


def default_database_path() -> str:
    """Return the database path from LEDGERKIT_DB_PATH or ~/.ledgerkit/ledgerkit.db."""
    database_path = os.environ.get(DB_PATH_ENV)
    if database_path is None:
        db_dir = Path.home() / ".ledgerkit"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "ledgerkit.db")
    return database_path


def load_rules(path: Optional[str] = None) -> ClassificationRules:
    """Load classification rules, merging a YAML file over the defaults.

    Args:
        path: YAML file path; falls back to LEDGERKIT_RULES_PATH, then to the
            built-in rules

    Returns:
        ClassificationRules instance

    Raises:
        ValidationError: If the file cannot be read or has an invalid shape
    """
    if path is None:
        path = os.environ.get(RULES_PATH_ENV)
    if path is None:
        return DEFAULT_RULES

    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise ValidationError(f"Rules file not found: {path}")
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid rules file {path}: {e}")

    if not isinstance(cfg, dict):
        raise ValidationError(f"Invalid rules file {path}: expected a mapping at top level")

    return rules_from_config(cfg)


def rules_from_config(cfg: dict[str, Any]) -> ClassificationRules:
    """Build rules from a config mapping, keeping defaults for missing sections."""
    try:
        vendors = DEFAULT_RULES.vendors
        if "vendors" in cfg:
            vendors = {
                name: VendorRule(
                    account_type=parse_account_type(rule["type"]),
                    confidence=float(rule["confidence"]),
                    subtype=rule.get("subtype"),
                )
                for name, rule in (cfg["vendors"] or {}).items()
            }

        keywords = DEFAULT_RULES.keywords
        if "keywords" in cfg:
            keywords = tuple(
                KeywordRule(
                    keyword=str(rule["keyword"]),
                    account_code=str(rule["account"]),
                    account_type=parse_account_type(rule["type"]),
                    confidence=float(rule["confidence"]),
                )
                for rule in (cfg["keywords"] or [])
            )

        return ClassificationRules(
            vendors=dict(vendors),
            keywords=keywords,
            food_category_terms=_string_list(
                cfg.get("food_category_terms", DEFAULT_RULES.food_category_terms),
                "food_category_terms",
            ),
            category_confidence=float(
                cfg.get("category_confidence", DEFAULT_RULES.category_confidence)
            ),
            default_confidence=float(
                cfg.get("default_confidence", DEFAULT_RULES.default_confidence)
            ),
            default_account_code=str(
                cfg.get("default_account_code", DEFAULT_RULES.default_account_code)
            ),
            default_account_name=str(
                cfg.get("default_account_name", DEFAULT_RULES.default_account_name)
            ),
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise ValidationError(f"Invalid classification rules: {e}")



def _string_list(value: Any, name: str) -> tuple[str, ...]:
    """Validate a config value that must be a list of strings.

    Raises:
        ValidationError: If the value is a scalar or holds non-strings
    """
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ValidationError(f"{name} must be a list of strings")
    return tuple(value)
