"""The answer record collected from the user and its name normalization."""

import re
from dataclasses import dataclass

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_SEPARATOR_RUN = re.compile(r"[\s_-]+")


def to_kebab_case(value: str) -> str:
    """Normalize free text into a kebab-case project identifier.

    Splits camelCase boundaries, collapses runs of whitespace, underscores
    and hyphens into a single hyphen, and lowercases the result.

    Args:
        value: Raw project name as typed by the user.

    Returns:
        The normalized identifier.

    Example:
        >>> to_kebab_case("My Cool App")
        'my-cool-app'
        >>> to_kebab_case("fooBarBaz")
        'foo-bar-baz'
    """
    split = _CAMEL_BOUNDARY.sub(r"\1-\2", value.strip())
    return _SEPARATOR_RUN.sub("-", split).lower()


def to_snake_case(value: str) -> str:
    """Return the underscore variant of the kebab-case identifier.

    Always derived from the kebab form so both spellings stay in lockstep.

    Example:
        >>> to_snake_case("demo-app")
        'demo_app'
    """
    return to_kebab_case(value).replace("-", "_")


@dataclass(frozen=True)
class AnswerRecord:
    """Answers for one setup run. Never persisted outside the rewritten files."""

    project_name: str
    product_name: str
    owner_account: str
    bundle_identifier: str
    author: str
    description: str
    target_platforms: tuple[str, ...]
    signing_methods: tuple[str, ...]
    selected_tools: tuple[str, ...]

    @property
    def snake_name(self) -> str:
        return to_snake_case(self.project_name)

    @property
    def library_name(self) -> str:
        return f"{self.snake_name}_lib"

    @property
    def repository_url(self) -> str:
        return f"https://github.com/{self.owner_account}/{self.project_name}"

    @property
    def updater_endpoint(self) -> str:
        return f"{self.repository_url}/releases/latest/download/latest.json"
