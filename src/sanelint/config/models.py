"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SANELINT__SECTION__KEY)
3. Repo YAML (.sanelint.yml, or the file passed with --config)
4. Global YAML (~/.config/sanelint/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    SANELINT__<SECTION>__<KEY>=<VALUE>

Examples:
    SANELINT__LOGGING__LEVEL=DEBUG
    SANELINT__RUNNER__MAX_FIX_ITERATIONS=3
    SANELINT__RULES__OUTDATED_COMMENTS__ENABLED=false
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SANELINT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG traces every skipped node.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class RuleConfig(BaseModel):
    """Settings shared by every rule."""

    enabled: bool = True


class PairedCall(BaseModel):
    """Declare-then-define call pair, e.g. ``desc "..."`` followed by ``task :x do``."""

    declarator: str
    block_call: str


class MultilineBlockConfig(RuleConfig):
    """Sane/EmptyLinesAroundMultilineBlock settings."""

    paired_calls: list[PairedCall] = Field(
        default_factory=lambda: [PairedCall(declarator="desc", block_call="task")],
        description="Pairs whose block call needs no empty line after its declarator.",
    )
    signature_calls: list[str] = Field(
        default_factory=lambda: ["sig"],
        description="Block calls that annotate the method definition following them.",
    )
    check_loops: bool = Field(
        default=True,
        description="Also require empty lines around multiline while/until/for loops.",
    )


class MethodReplacement(BaseModel):
    """Replacement entry for Sane/DisallowMethods."""

    model_config = ConfigDict(populate_by_name=True)

    with_: str = Field(alias="with")
    reason: str


class MethodProhibition(BaseModel):
    """Prohibition entry for Sane/DisallowMethods."""

    reason: str


class DisallowMethodsConfig(RuleConfig):
    """Sane/DisallowMethods settings. Both maps default to empty."""

    replace_methods: dict[str, MethodReplacement] = Field(default_factory=dict)
    prohibited_methods: dict[str, MethodProhibition] = Field(default_factory=dict)

    @field_validator("replace_methods", "prohibited_methods", mode="before")
    @classmethod
    def empty_when_null(cls, v: object) -> object:
        # An empty YAML key loads as None
        return {} if v is None else v


class RulesConfig(BaseModel):
    """Per-rule configuration, keyed by the snake_case rule name."""

    empty_lines_around_multiline_block: MultilineBlockConfig = Field(
        default_factory=MultilineBlockConfig
    )
    empty_line_before_comment: RuleConfig = Field(default_factory=RuleConfig)
    no_method_call_after_end: RuleConfig = Field(default_factory=RuleConfig)
    conditional_assignment_allow_ternary: RuleConfig = Field(default_factory=RuleConfig)
    disallow_methods: DisallowMethodsConfig = Field(default_factory=DisallowMethodsConfig)
    outdated_comments: RuleConfig = Field(default_factory=RuleConfig)


class RunnerConfig(BaseModel):
    """File discovery and fix loop configuration.

    Env vars:
        SANELINT__RUNNER__MAX_FIX_ITERATIONS: Upper bound on fix/re-check passes
    """

    max_fix_iterations: int = Field(
        default=5,
        description="Fix mode re-runs the pass until clean or this many passes ran.",
    )
    extensions: list[str] = Field(
        default_factory=lambda: [".rb", ".rake", ".gemspec", ".ru"],
        description="File extensions treated as Ruby source.",
    )
    filenames: list[str] = Field(
        default_factory=lambda: ["Rakefile", "Gemfile", "Guardfile", "Vagrantfile"],
        description="Extensionless file names treated as Ruby source.",
    )
    excluded_dirs: list[str] = Field(
        default_factory=lambda: [".git", ".hg", ".svn", ".bundle", "vendor", "node_modules", "tmp"],
        description="Directory names never descended into.",
    )

    @field_validator("max_fix_iterations")
    @classmethod
    def validate_iterations(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_fix_iterations must be >= 1, got {v}")
        return v


class SaneLintConfig(BaseModel):
    """Root configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    rules: RulesConfig = Field(default_factory=RulesConfig)
    runner: RunnerConfig = Field(default_factory=RunnerConfig)
