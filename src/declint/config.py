from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping

# (primary option, secondary options)
RuleSettings = tuple[object, "Mapping[str, object] | None"]

CONFIG_FILENAMES = (".declintrc.json", "declint.json")


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or understood."""


@dataclass(frozen=True)
class LintConfig:
    rules: Mapping[str, RuleSettings] = field(default_factory=dict)
    fix: bool = False

    def with_rule(self, name: str, settings: RuleSettings) -> LintConfig:
        """Return a copy with *name* configured as *settings*."""
        rules = dict(self.rules)
        rules[name] = settings
        return replace(self, rules=rules)


def normalize_rule_settings(raw: object) -> RuleSettings:
    """Turn a config file rule entry into ``(primary, secondary_options)``.

    Accepted forms: ``true``, ``null``/``false`` (disabled) and
    ``[primary, {options}]``.
    """
    if isinstance(raw, list):
        if not raw:
            return (None, None)
        options = raw[1] if len(raw) > 1 else None
        return (raw[0], options)  # type: ignore[return-value]
    return (raw, None)


def load_config(path: str | Path) -> LintConfig:
    """Load a JSON config file of the form ``{"rules": {...}, "fix": false}``."""
    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")
    rules = data.get("rules", {})
    if not isinstance(rules, dict):
        raise ConfigError(f'"rules" in {config_path} must be an object')

    return LintConfig(
        rules={name: normalize_rule_settings(raw) for name, raw in rules.items()},
        fix=bool(data.get("fix", False)),
    )


def find_config(directory: str | Path = ".") -> Path | None:
    """Return the first known config file in *directory*, if any."""
    for name in CONFIG_FILENAMES:
        candidate = Path(directory) / name
        if candidate.is_file():
            return candidate
    return None
