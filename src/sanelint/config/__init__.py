"""Config module exports."""

from sanelint.config.loader import load_config
from sanelint.config.models import (
    DisallowMethodsConfig,
    LoggingConfig,
    MultilineBlockConfig,
    RuleConfig,
    RulesConfig,
    RunnerConfig,
    SaneLintConfig,
)

__all__ = [
    "load_config",
    "DisallowMethodsConfig",
    "LoggingConfig",
    "MultilineBlockConfig",
    "RuleConfig",
    "RulesConfig",
    "RunnerConfig",
    "SaneLintConfig",
]
