"""Unified configuration for fortune scoring."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from fortune_score.display import DisplayMode
from fortune_score.expression.digits import check_base
from fortune_score.models import Algorithm
from fortune_score.remote.random_org import DEFAULT_TIMEOUT_MS


@dataclass
class RemoteConfig:
    """True-randomness source configuration.

    Parameters
    ----------
    source : str
        Name of a registered :class:`~fortune_score.remote.RandomSource`.
    api_key : str
        API key passed to the source. Empty means every fetch falls back.
    timeout_ms : int
        Hard request timeout in milliseconds.
    """

    source: str = "random_org"
    api_key: str = ""
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self) -> None:
        if not self.source:
            msg = "source must be a non-empty string"
            raise ValueError(msg)
        if self.timeout_ms <= 0:
            msg = f"timeout_ms must be > 0, got {self.timeout_ms}"
            raise ValueError(msg)


@dataclass
class IdentificationConfig:
    """Identification-code scoring.

    Parameters
    ----------
    password : str
        Configuration-wide salt. Empty disables identification-code scoring.
    """

    password: str = ""

    @property
    def enabled(self) -> bool:
        return bool(self.password)


@dataclass
class ExpressionConfig:
    """Expression display settings.

    ``base_digit`` must satisfy :func:`~fortune_score.expression.digits.check_base`,
    the same rule :class:`~fortune_score.expression.ExpressionSynthesizer` applies.
    """

    base_digit: int = 6

    def __post_init__(self) -> None:
        check_base(self.base_digit)


@dataclass
class FortuneConfig:
    """Top-level configuration.

    Parameters
    ----------
    algorithm : Algorithm
        Active scoring strategy.
    identification : IdentificationConfig
        Identification-code settings.
    remote : RemoteConfig
        Remote randomness settings, used when ``algorithm`` is ``REMOTE``.
    expression : ExpressionConfig
        Expression display settings.
    display_mode : DisplayMode
        Default rendering for scores.
    """

    algorithm: Algorithm = Algorithm.LINEAR
    identification: IdentificationConfig = field(default_factory=IdentificationConfig)
    remote: RemoteConfig = field(default_factory=RemoteConfig)
    expression: ExpressionConfig = field(default_factory=ExpressionConfig)
    display_mode: DisplayMode = DisplayMode.PLAIN


def _parse_enum(enum_cls: type[Enum], value: Any, key: str) -> Enum:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        msg = f"Unknown {key} {value!r}. Choose one of: {choices}"
        raise ValueError(msg) from None


def load_config(source: str | Path | dict[str, Any] | None = None) -> FortuneConfig:
    """Build a :class:`FortuneConfig` from a YAML file or mapping, then apply environment overrides.

    Every setting resolves in the same order: its ``FORTUNE_*`` environment
    variable, then the value in *source*, then the dataclass default. A path
    that does not point at a file contributes nothing.

    Parameters
    ----------
    source : str | Path | dict | None
        YAML file path, an already parsed mapping, or ``None``.

    Returns
    -------
    FortuneConfig

    Raises
    ------
    ValueError
        If any value fails validation.
    """
    raw = _read_source(source)
    sections = {name: raw.get(name) or {} for name in ("identification", "remote", "expression", "display")}
    sections[""] = raw

    def setting(env_var: str, name: str, key: str, default: Any) -> Any:
        return os.environ.get(env_var, sections[name].get(key, default))

    return FortuneConfig(
        algorithm=_parse_enum(Algorithm, setting("FORTUNE_ALGORITHM", "", "algorithm", "linear"), "algorithm"),
        identification=IdentificationConfig(
            password=setting("FORTUNE_CODE_PASSWORD", "identification", "password", ""),
        ),
        remote=RemoteConfig(
            source=sections["remote"].get("source", "random_org"),
            api_key=setting("FORTUNE_RANDOM_ORG_API_KEY", "remote", "api_key", ""),
            timeout_ms=int(setting("FORTUNE_REMOTE_TIMEOUT_MS", "remote", "timeout_ms", DEFAULT_TIMEOUT_MS)),
        ),
        expression=ExpressionConfig(
            base_digit=int(setting("FORTUNE_BASE_DIGIT", "expression", "base_digit", 6)),
        ),
        display_mode=_parse_enum(
            DisplayMode, setting("FORTUNE_DISPLAY_MODE", "display", "mode", "plain"), "display mode"
        ),
    )


def _read_source(source: str | Path | dict[str, Any] | None) -> dict[str, Any]:
    if isinstance(source, dict):
        return source
    if source is None or not Path(source).is_file():
        return {}
    text = Path(source).read_text(encoding="utf-8")
    return yaml.safe_load(text) or {}
