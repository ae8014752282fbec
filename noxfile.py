"""Nox-UV sessions for local testing.

Nox-UV uses UV for fast virtual environment creation and package installation.

Usage:
    nox -s test        # Run tests across multiple Python versions
    nox -s lint        # Run Ruff linting
    nox -s typecheck   # Run MyPy type checking
"""

import nox
import nox_uv

# Use nox-uv for faster environment creation
nox_uv.register()

nox.options.sessions = ["test", "lint", "typecheck"]
nox.options.reuse_existing_virtualenvs = True
nox.options.default_venv_backend = "uv"


@nox.session(python=["3.11", "3.12", "3.13"])
def test(session: nox.Session) -> None:
    """Run tests across multiple Python versions.

    The suite drives the engine against a copy of the fixture template in
    tests/fixtures, with a fake command runner, so no git, bun or cargo
    installation is needed.
    """
    session.install("-e", ".[dev]")
    session.run(
        "pytest",
        "-v",
        "--cov=src",
        "--cov-report=xml",
        "--cov-report=term-missing:skip-covered",
        "--cov-fail-under=85",
        "tests/",
        *session.posargs,
    )


@nox.session(python="3.12")
def lint(session: nox.Session) -> None:
    """Run Ruff linting and the formatting check."""
    session.install("-e", ".[dev]")
    session.run("ruff", "check", ".", "--config=pyproject.toml")
    session.run("ruff", "format", "--check")


@nox.session(python="3.12")
def typecheck(session: nox.Session) -> None:
    """Run MyPy type checking over the package."""
    session.install("-e", ".[dev]")
    session.run("mypy", "src", "--config-file=pyproject.toml")
