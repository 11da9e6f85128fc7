"""
Path rewrite rules.

A rule maps a source pattern to a target, e.g. ``"/api/*": "/$1"``.
Source patterns understand ``*`` (any text, numbered group) and ``:name``
(a single path segment, named group). Targets refer to groups with ``$1``
and ``:name``.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_RULES: dict[str, str] = {"/api/*": "/$1"}

_TOKEN = re.compile(r"\*|:([A-Za-z_][A-Za-z0-9_]*)")
_TARGET_TOKEN = re.compile(r"\$(\d+)|:([A-Za-z_][A-Za-z0-9_]*)")


class RewriteRuleError(ValueError):
    """Raised when a rule table cannot be parsed."""


@dataclass(frozen=True)
class RewriteRule:
    source: str
    target: str
    pattern: re.Pattern

    def apply(self, path: str) -> str | None:
        """Return the rewritten path, or None when the rule does not match."""
        match = self.pattern.fullmatch(path)
        if not match:
            return None
        positional = _positional_groups(match)

        def _sub(m: re.Match) -> str:
            if m.group(1) is not None:
                idx = int(m.group(1)) - 1
                return positional[idx] if 0 <= idx < len(positional) else ""
            return match.groupdict().get(m.group(2)) or ""

        return _TARGET_TOKEN.sub(_sub, self.target)


def _positional_groups(match: re.Match) -> list[str]:
    # todos os grupos, nomeados ou nao, em ordem de aparicao
    return [g or "" for g in match.groups()]


def compile_rule(source: str, target: str) -> RewriteRule:
    parts: list[str] = []
    pos = 0
    for token in _TOKEN.finditer(source):
        parts.append(re.escape(source[pos : token.start()]))
        if token.group(0) == "*":
            parts.append("(.*)")
        else:
            parts.append(f"(?P<{token.group(1)}>[^/]+?)")
        pos = token.end()
    parts.append(re.escape(source[pos:]))
    regex = "".join(parts)
    if not regex.endswith("/"):
        regex += "/?"
    try:
        pattern = re.compile(regex, re.IGNORECASE)
    except re.error as exc:
        raise RewriteRuleError(f"Invalid rewrite pattern '{source}': {exc}") from exc
    return RewriteRule(source, target, pattern)


def compile_rules(rules: Mapping[str, str]) -> list[RewriteRule]:
    return [compile_rule(src, dst) for src, dst in rules.items()]


def rewrite_path(rules: list[RewriteRule], path: str) -> str:
    """Run every rule in order, each on the output of the previous one."""
    for rule in rules:
        rewritten = rule.apply(path)
        if rewritten is not None:
            path = rewritten if rewritten.startswith("/") else "/" + rewritten
    return path


def load_rules_file(path: str | Path) -> dict[str, str]:
    """Read an extra rule table from a JSON object file."""
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        raise RewriteRuleError(f"Could not read rewrite rules from {path}: {exc}") from exc
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise RewriteRuleError(f"Rewrite rules in {path} must be an object of strings")
    return data
