"""Rule base class and registry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import ClassVar

from sanelint.config.models import RuleConfig, RulesConfig
from sanelint.lint.models import Diagnostic, EditInstruction, Severity
from sanelint.syntax.parser import ParsedSource
from sanelint.syntax.tree import Span


class Rule(ABC):
    """A style rule: a pure function from one parsed file to diagnostics.

    Subclasses set the class attributes and implement ``investigate``. A rule
    never mutates the source; fixes are returned as edit instructions on the
    diagnostics and applied by the runner after the pass.
    """

    rule_id: ClassVar[str]
    description: ClassVar[str]
    config_key: ClassVar[str]
    config_model: ClassVar[type[RuleConfig]] = RuleConfig
    default_severity: ClassVar[Severity] = Severity.CONVENTION
    requires_valid_syntax: ClassVar[bool] = False

    def __init__(self, config: RuleConfig | None = None) -> None:
        self.config = config if config is not None else self.config_model()

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    @abstractmethod
    def investigate(self, source: ParsedSource) -> list[Diagnostic]:
        """Return diagnostics for one file, in source order."""

    def diagnostic(
        self,
        source: ParsedSource,
        span: Span,
        message: str,
        *,
        fix: Sequence[EditInstruction] = (),
        severity: Severity | None = None,
    ) -> Diagnostic:
        return Diagnostic(
            path=source.path,
            rule_id=self.rule_id,
            message=message,
            span=span,
            severity=severity or self.default_severity,
            fix=tuple(fix),
            char_columns=source.char_columns(span),
        )


class RuleRegistry:
    """Registry of rule classes, keyed by rule id."""

    def __init__(self) -> None:
        self._rules: dict[str, type[Rule]] = {}

    def register(self, rule_cls: type[Rule]) -> type[Rule]:
        """Register a rule class. Usable as a class decorator."""
        self._rules[rule_cls.rule_id] = rule_cls
        return rule_cls

    def get(self, rule_id: str) -> type[Rule] | None:
        """Get rule class by ID."""
        return self._rules.get(rule_id)

    def all(self) -> list[type[Rule]]:
        """Get all registered rule classes."""
        return list(self._rules.values())

    def instantiate(self, rules_config: RulesConfig) -> list[Rule]:
        """Build one configured instance per registered rule."""
        return [
            rule_cls(getattr(rules_config, rule_cls.config_key)) for rule_cls in self._rules.values()
        ]

    def clear(self) -> None:
        """Clear all registered rules."""
        self._rules.clear()


# Global registry
registry = RuleRegistry()
