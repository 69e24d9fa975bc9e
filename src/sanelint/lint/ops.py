"""Lint operations - check and fix."""

from __future__ import annotations

import dataclasses
import os
import time
from collections.abc import Iterable
from pathlib import Path
from typing import Literal

from sanelint.config.models import SaneLintConfig
from sanelint.core.errors import ConfigError, InternalError, ParseError, SaneLintError
from sanelint.core.logging import get_logger
from sanelint.lint.models import Diagnostic, FileResult, LintResult
from sanelint.lint.patch import apply_edits
from sanelint.lint.rules import Rule, registry
from sanelint.syntax.parser import ParsedSource, RubyParser, is_ruby_file

log = get_logger("lint.ops")


class LintOps:
    """Lint operations for a directory tree.

    Each file is handled independently: parse, run every enabled rule, and
    in fix mode apply the collected edits and re-run until nothing fixable
    is left or ``runner.max_fix_iterations`` passes ran.
    """

    def __init__(
        self,
        repo_root: Path,
        config: SaneLintConfig,
        *,
        only: Iterable[str] | None = None,
        parser: RubyParser | None = None,
    ) -> None:
        self._repo_root = repo_root
        self._config = config
        self._parser = parser
        self._rules = self._select_rules(only)

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules)

    def _select_rules(self, only: Iterable[str] | None) -> list[Rule]:
        rules = registry.instantiate(self._config.rules)
        if only is None:
            return [rule for rule in rules if rule.enabled]
        wanted = set(only)
        unknown = wanted - {rule.rule_id for rule in rules}
        if unknown:
            raise ConfigError.invalid_value(
                "only", ", ".join(sorted(unknown)), "unknown rule id"
            )
        # An explicit selection runs the rule even when disabled in config
        return [rule for rule in rules if rule.rule_id in wanted]

    def _get_parser(self) -> RubyParser:
        if self._parser is None:
            self._parser = RubyParser()
        return self._parser

    def check(self, paths: list[str] | None = None, *, fix: bool = False) -> LintResult:
        """Lint files under ``paths`` (default: the whole repo root).

        Args:
            paths: Files or directories, relative to the repo root or absolute
            fix: Apply fixes and write the files back

        Returns:
            LintResult with one FileResult per discovered file
        """
        start_time = time.time()
        action: Literal["check", "fix"] = "fix" if fix else "check"
        files = self.discover_files(paths)
        log.info("lint_start", action=action, files=len(files), rules=len(self._rules))

        results = [self.lint_file(path, fix=fix) for path in files]

        result = LintResult(
            action=action,
            files=results,
            duration_seconds=time.time() - start_time,
        )
        log.info(
            "lint_complete",
            status=result.status,
            diagnostics=result.total_diagnostics,
            files_modified=result.total_files_modified,
        )
        return result

    def discover_files(self, paths: list[str] | None = None) -> list[Path]:
        """Ruby files under the given paths, sorted and de-duplicated.

        Explicitly named files are always included; directories are walked
        for Ruby extensions and file names, skipping excluded directories.
        """
        runner = self._config.runner
        excluded = set(runner.excluded_dirs)
        targets = [self._resolve(p) for p in paths] if paths else [self._repo_root]
        found: set[Path] = set()

        for target in targets:
            if target.is_file():
                found.add(target)
                continue
            if not target.is_dir():
                log.warning("path_not_found", path=str(target))
                continue
            for dirpath, dirnames, filenames in os.walk(target):
                dirnames[:] = [d for d in dirnames if d not in excluded]
                for name in filenames:
                    candidate = Path(dirpath) / name
                    if is_ruby_file(candidate, runner.extensions, runner.filenames):
                        found.add(candidate)

        return sorted(found)

    def _resolve(self, path: str) -> Path:
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self._repo_root / candidate
        return candidate

    def _display_path(self, path: Path) -> str:
        try:
            return str(path.relative_to(self._repo_root))
        except ValueError:
            return str(path)

    def lint_file(self, path: Path, *, fix: bool = False) -> FileResult:
        """Lint one file; in fix mode the file is rewritten when edits apply."""
        display = self._display_path(path)
        result = FileResult(path=display)
        try:
            content = path.read_bytes()
            content.decode("utf-8")
        except UnicodeDecodeError as e:
            result.errors.append(ParseError.decode_error(display, str(e)))
            return result
        except OSError as e:
            result.errors.append(InternalError.unexpected(str(e), path=display))
            return result

        corrected: list[Diagnostic] = []
        # Every fix round is followed by a re-check pass
        max_passes = self._config.runner.max_fix_iterations + 1
        while True:
            result.passes += 1
            try:
                parsed = self._get_parser().parse(content, path=display)
            except SaneLintError as e:
                result.errors.append(e)
                return result
            diagnostics, errors = self._run_rules(parsed)

            if not fix or result.passes >= max_passes:
                break
            if not parsed.valid_syntax:
                log.info("fix_skipped_invalid_syntax", path=display)
                break
            edits = [edit for d in diagnostics for edit in d.fix]
            if not edits:
                break
            patch = apply_edits(content, edits)
            if not patch.changed:
                break
            applied = {id(edit) for edit in patch.applied}
            for diagnostic in diagnostics:
                if diagnostic.fix and all(id(edit) in applied for edit in diagnostic.fix):
                    corrected.append(dataclasses.replace(diagnostic, fix_applied=True))
            content = patch.text
            result.modified = True

        result.diagnostics = corrected + diagnostics
        result.errors.extend(errors)
        if result.modified:
            path.write_bytes(content)
            log.info("file_fixed", path=display, passes=result.passes, corrected=len(corrected))
        return result

    def _run_rules(self, parsed: ParsedSource) -> tuple[list[Diagnostic], list[SaneLintError]]:
        diagnostics: list[Diagnostic] = []
        errors: list[SaneLintError] = []
        for rule in self._rules:
            if rule.requires_valid_syntax and not parsed.valid_syntax:
                continue
            try:
                diagnostics.extend(rule.investigate(parsed))
            except Exception as e:
                log.exception("rule_failed", rule=rule.rule_id, path=parsed.path)
                errors.append(InternalError.rule_failure(rule.rule_id, parsed.path, str(e)))
        diagnostics.sort(key=lambda d: (d.span.start_byte, d.rule_id))
        return diagnostics, errors
