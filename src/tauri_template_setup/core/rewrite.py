"""Anchored text rewrites over the template's manifests and docs.

A rule is a (file, anchor pattern, replacement producer) triple. When the
anchor is absent the rule does nothing, so rerunning against rewritten files
is a no-op. Replacement producers receive the match and return the final
text; user input is never parsed for backreferences.
"""

import html
import json
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from tauri_template_setup.core.answers import AnswerRecord
from tauri_template_setup.core.catalog import Catalog
from tauri_template_setup.utils.console import StatusConsole
from tauri_template_setup.utils.logging import get_logger

logger = get_logger(__name__)

Producer = Callable[[re.Match[str]], str]

UPDATER_PUBKEY_PLACEHOLDER = "YOUR_PUBLIC_KEY_HERE"


@dataclass(frozen=True)
class RewriteRule:
    """Replace the first (or, with ``count=0``, every) match of an anchor.

    Attributes:
        path: Target file relative to the project root.
        pattern: Compiled anchor pattern.
        replacement: Producer returning the replacement text for a match.
        count: Maximum substitutions; 0 means all.
    """

    path: str
    pattern: re.Pattern[str]
    replacement: Producer
    count: int = 1

    def apply(self, content: str) -> str:
        return self.pattern.sub(self.replacement, content, count=self.count)


def literal(text: str) -> Producer:
    """Producer that always returns ``text``."""
    return lambda _match: text


def _quoted(value: str) -> str:
    # JSON string escaping is also a valid TOML basic string.
    return json.dumps(value, ensure_ascii=False)


def _json_field(key: str, value: str) -> re.Pattern[str]:
    return re.compile(rf'"{re.escape(key)}":\s*"{re.escape(value)}"')


def _toml_field(key: str, value: str) -> re.Pattern[str]:
    return re.compile(rf'^{re.escape(key)} = "{re.escape(value)}"$', re.MULTILINE)


def rewrite_file(
    root: Path, relative_path: str, rules: Iterable[RewriteRule], status: StatusConsole
) -> bool:
    """Apply rules to one file, writing it back only if its text changed.

    Args:
        root: Project root.
        relative_path: Target file relative to root.
        rules: Rules applied sequentially to the progressively updated text.
        status: Where to report the outcome.

    Returns:
        True if the file was modified. A missing or unreadable file is
        reported and returns False without raising.
    """
    path = root / relative_path
    if not path.exists():
        status.error(f"File not found: {relative_path}")
        logger.info("Rewrite target missing", path=relative_path)
        return False

    try:
        content = path.read_text(encoding="utf-8")
        updated = content
        for rule in rules:
            updated = rule.apply(updated)
        if updated == content:
            logger.debug("No anchors matched", path=relative_path)
            return False
        path.write_text(updated, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        status.warn(f"Could not update {relative_path}: {e}")
        return False

    status.success(f"Updated {relative_path}")
    return True


def apply_rules(root: Path, rules: Iterable[RewriteRule], status: StatusConsole) -> dict[str, bool]:
    """Group rules by file (first-seen order) and rewrite each file once.

    Returns:
        Mapping of relative path to whether the file changed.
    """
    grouped: dict[str, list[RewriteRule]] = {}
    for rule in rules:
        grouped.setdefault(rule.path, []).append(rule)
    return {
        path: rewrite_file(root, path, file_rules, status) for path, file_rules in grouped.items()
    }


def delete_file(root: Path, relative_path: str, status: StatusConsole) -> bool:
    """Delete a template-only file.

    Returns:
        True if deleted. A missing file is a silent no-op; a failed delete
        is a warning.
    """
    path = root / relative_path
    if not path.exists():
        return False
    try:
        path.unlink()
    except OSError as e:
        status.warn(f"Failed to delete {relative_path}")
        logger.info("Delete failed", path=relative_path, error=str(e))
        return False
    status.success(f"Deleted {relative_path}")
    return True


def personalization_rules(answers: AnswerRecord, catalog: Catalog) -> list[RewriteRule]:
    """Build the rule catalog that renames the template into the new project."""
    t = catalog.template
    project = answers.project_name
    product = answers.product_name

    rules = [
        RewriteRule(
            catalog.package_manifest,
            _json_field("name", t.name),
            literal(f'"name": {_quoted(project)}'),
        ),
        # Native shell configuration
        RewriteRule(
            catalog.shell_manifest,
            _json_field("productName", t.name),
            literal(f'"productName": {_quoted(product)}'),
        ),
        RewriteRule(
            catalog.shell_manifest,
            _json_field("identifier", t.identifier),
            literal(f'"identifier": {_quoted(answers.bundle_identifier)}'),
        ),
        RewriteRule(
            catalog.shell_manifest,
            _json_field("title", t.name),
            literal(f'"title": {_quoted(product)}'),
        ),
        RewriteRule(
            catalog.shell_manifest,
            re.compile(re.escape(_quoted(t.updater_endpoint))),
            literal(_quoted(answers.updater_endpoint)),
        ),
        RewriteRule(
            catalog.shell_manifest,
            _json_field("pubkey", t.updater_pubkey),
            literal(f'"pubkey": "{UPDATER_PUBKEY_PLACEHOLDER}"'),
        ),
        # Native build manifest; the package name must not match the [[bin]] entry
        RewriteRule(
            catalog.native_manifest,
            re.compile(rf'(?<!\[\[bin\]\]\n)^name = "{re.escape(t.name)}"$', re.MULTILINE),
            literal(f"name = {_quoted(project)}"),
        ),
        RewriteRule(
            catalog.native_manifest,
            _toml_field("description", t.native_description),
            literal(f"description = {_quoted(answers.description)}"),
        ),
        RewriteRule(
            catalog.native_manifest,
            _toml_field("name", t.library_name),
            literal(f"name = {_quoted(answers.library_name)}"),
        ),
        RewriteRule(
            catalog.native_manifest,
            _toml_field("default-run", t.name),
            literal(f"default-run = {_quoted(project)}"),
        ),
        RewriteRule(
            catalog.native_manifest,
            re.compile(rf'^(\[\[bin\]\]\n)name = "{re.escape(t.name)}"$', re.MULTILINE),
            lambda m: f"{m.group(1)}name = {_quoted(project)}",
        ),
        RewriteRule(
            catalog.native_entry_point,
            re.compile(rf"\b{re.escape(t.library_name)}::run\(\)"),
            literal(f"{answers.library_name}::run()"),
        ),
        RewriteRule(
            catalog.html_entry,
            re.compile(rf"<title>{re.escape(t.html_title)}</title>"),
            literal(f"<title>{html.escape(product, quote=False)}</title>"),
        ),
        RewriteRule(
            catalog.agent_instructions,
            re.compile(re.escape(t.identifier)),
            literal(answers.bundle_identifier),
            count=0,
        ),
        RewriteRule(
            catalog.contributing_guide,
            re.compile(
                rf"git clone {re.escape(t.repository_url)}\.git\n([ \t]*)cd {re.escape(t.name)}\b"
            ),
            lambda m: f"git clone {answers.repository_url}.git\n{m.group(1)}cd {project}",
        ),
    ]

    if answers.author:
        rules.append(
            RewriteRule(
                catalog.native_manifest,
                re.compile(rf"^authors = {re.escape(t.native_authors)}$", re.MULTILINE),
                literal(f"authors = [{_quoted(answers.author)}]"),
            )
        )
        rules.append(
            RewriteRule(
                catalog.license_file,
                re.compile(r"^Copyright \(c\) (\d{4}).*$", re.MULTILINE),
                lambda m: f"Copyright (c) {m.group(1)} {answers.author}",
            )
        )

    rules.extend(readme_rules(answers, catalog))
    return rules


def readme_rules(answers: AnswerRecord, catalog: Catalog) -> list[RewriteRule]:
    """Retitle the README and strip the sections that only describe the template."""
    t = catalog.template
    tree_line = re.escape(f"│   ├── {catalog.setup_script_name}")
    return [
        RewriteRule(
            catalog.readme,
            re.compile(r"^\[!\[CI\][^\n]*\n\n?", re.MULTILINE),
            literal(""),
        ),
        RewriteRule(
            catalog.readme,
            re.compile(rf"^# {re.escape(t.readme_title)}$", re.MULTILINE),
            literal(f"# {answers.product_name}"),
        ),
        RewriteRule(
            catalog.readme,
            re.compile(re.escape(t.readme_description)),
            literal(answers.description),
        ),
        RewriteRule(
            catalog.readme,
            re.compile(r"^## Why This Template\?.*?(?=^## Features)", re.MULTILINE | re.DOTALL),
            literal(""),
        ),
        RewriteRule(
            catalog.readme,
            re.compile(r"^## Quick Start.*?(?=^## Project Structure)", re.MULTILINE | re.DOTALL),
            literal(""),
        ),
        RewriteRule(
            catalog.readme,
            re.compile(rf"^{tree_line}[ \t]+# Project initialization\n", re.MULTILINE),
            literal(""),
        ),
    ]


def template_residue_rules(catalog: Catalog) -> list[RewriteRule]:
    """Rules stripping the setup hooks and the create CLI from the package manifest."""
    script = re.escape(catalog.setup_script)
    return [
        RewriteRule(
            catalog.package_manifest,
            re.compile(rf'"postinstall": "[^"\n]*{script}[^"\n]*",\n\s*'),
            literal(""),
        ),
        RewriteRule(
            catalog.package_manifest,
            re.compile(rf',\n\s*"setup": "[^"\n]*{script}[^"\n]*"'),
            literal(""),
        ),
        RewriteRule(
            catalog.package_manifest,
            re.compile(r'\n[ \t]*"bin": \{[^}]*\},(?=\n)'),
            literal(""),
        ),
    ]


def agent_config_rule(agents: Iterable[str], catalog: Catalog) -> RewriteRule:
    """Rule replacing the ``default_agents`` list in the agent routing config."""
    return RewriteRule(
        catalog.agent_config,
        re.compile(r"^default_agents\s*=\s*\[.*\]$", re.MULTILINE),
        literal(f"default_agents = {json.dumps(list(agents))}"),
    )
