"""Nox sessions for multi-environment testing and quality assurance."""

import nox


@nox.session(python=["3.13", "3.14"])
def tests(session: nox.Session) -> None:
    """Run test suite with coverage reporting.

    Args:
        session: The nox session object.
    """
    session.install("-e", ".[test]")
    session.run(
        "pytest",
        "--cov=hierconf",
        "--cov-report=term-missing:skip-covered",
        "--cov-report=html",
        "--cov-fail-under=80",
    )


@nox.session(python=["3.13"])
def doctests(session: nox.Session) -> None:
    """Run the examples embedded in the sanitization and logging docstrings.

    Args:
        session: The nox session object.
    """
    session.install("-e", ".[test]")
    session.run("pytest", "--doctest-modules", "src/hierconf/utils/sanitization.py", "src/hierconf/utils/logging.py")


@nox.session(python=["3.13"])
def lint(session: nox.Session) -> None:
    """Run ruff linting and formatting checks.

    Args:
        session: The nox session object.
    """
    session.install("ruff")
    session.run("ruff", "check", ".")
    session.run("ruff", "format", "--check", ".")


@nox.session(python=["3.13"])
def typecheck(session: nox.Session) -> None:
    """Run basedpyright type checking.

    Args:
        session: The nox session object.
    """
    session.install("-e", ".[dev]")
    session.run("basedpyright")


@nox.session(python=["3.13"])
def format(session: nox.Session) -> None:
    """Auto-format code with ruff.

    Args:
        session: The nox session object.
    """
    session.install("ruff")
    session.run("ruff", "check", ".", "--fix")
    session.run("ruff", "format", ".")


@nox.session(python=["3.13"])
def check_isolation(session: nox.Session) -> None:
    """Check that core modules don't depend on concrete formats or transports.

    Enforces the architectural rule that core/, types/, and utils/
    directories must remain format-agnostic.

    Args:
        session: The nox session object.
    """
    session.run("python3", "scripts/check_format_isolation.py", external=True)
