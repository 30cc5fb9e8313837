"""Invoke tasks for the Eduverse development workflow.

Every task shells out to the `uv` CLI so the virtual environment, the test run and
the static checks all use the versions pinned by the project.
"""

from __future__ import annotations

import shlex
import shutil
import tempfile
from collections.abc import Mapping, Sequence
from pathlib import Path

from invoke import Collection, Context, task

PROJECT_ROOT = Path(__file__).parent
DIST_DIR = PROJECT_ROOT / "dist"
CHECKED_PATHS = ("src", "tests")


def _run_uv(
    ctx: Context,
    args: Sequence[str],
    *,
    echo: bool = True,
    env: Mapping[str, str] | None = None,
) -> None:
    """Run ``uv`` with the given arguments.

    Args:
        ctx: Invoke execution context.
        args: Arguments appended after the `uv` executable.
        echo: Whether to echo the command before running it.
        env: Extra environment variables for the invocation.
    """
    run_env = dict(ctx.config.run.env or {})
    if env:
        run_env.update(env)
    ctx.run(shlex.join(("uv", *args)), echo=echo, pty=True, env=run_env)


@task
def sync(ctx: Context, dev: bool = True) -> None:
    """Create or refresh the virtual environment.

    Args:
        ctx: Invoke execution context.
        dev: Install the `dev` extra (pytest, ruff, mypy) as well.
    """
    args = ["sync"]
    if dev:
        args.extend(["--extra", "dev"])
    _run_uv(ctx, args)


@task(help={"clean": "Empty dist/ before building."})
def build(ctx: Context, clean: bool = False) -> None:
    """Build the sdist and wheel into `dist/`."""
    if clean and DIST_DIR.exists():
        shutil.rmtree(DIST_DIR)
    _run_uv(ctx, ["build"])


@task(
    help={
        "k": "pytest -k expression for test selection.",
        "path": "Path or module to test (defaults to tests/).",
        "options": "Additional flags forwarded verbatim to pytest.",
    }
)
def tests(ctx: Context, k: str = "", path: str = "tests", options: str = "") -> None:
    """Run the pytest suite.

    Args:
        ctx: Invoke execution context.
        k: `pytest -k` expression to select tests.
        path: Target path for pytest discovery.
        options: Extra arguments appended to the pytest call.
    """
    args: list[str] = ["run", "pytest"]
    if k:
        args.extend(["-k", k])
    if options:
        args.extend(shlex.split(options))
    args.append(path)
    _run_uv(ctx, args)


@task(help={"fix": "Apply Ruff auto-fixes.", "check_format": "Run `ruff format --check` first."})
def lint(ctx: Context, fix: bool = False, check_format: bool = False) -> None:
    """Run Ruff over the sources and tests."""
    if check_format:
        _run_uv(ctx, ["run", "ruff", "format", "--check", *CHECKED_PATHS])
    args: list[str] = ["run", "ruff", "check", *CHECKED_PATHS]
    if fix:
        args.append("--fix")
    _run_uv(ctx, args)


@task
def mypy(ctx: Context) -> None:
    """Type-check the `eduverse` package."""
    _run_uv(ctx, ["run", "mypy", "src"])


@task
def smoke(ctx: Context) -> None:
    """Exercise a few CLI commands against a throwaway home directory.

    Args:
        ctx: Invoke execution context.
    """
    with tempfile.TemporaryDirectory(prefix="eduverse-smoke-") as home:
        env = {"HOME": home}
        for command in (
            ["config", "view"],
            ["folders", "create", "Smoke"],
            ["folders", "list"],
            ["todo", "add", "Read chapter 1"],
            ["todo", "list"],
            ["calc", "sqrt(16) + 2^3"],
        ):
            _run_uv(ctx, ["run", "eduverse", *command], env=env)


@task
def ci(ctx: Context) -> None:
    """Run lint, type checks and tests the way CI does."""
    ctx.invoke(lint, check_format=True)
    ctx.invoke(mypy)
    ctx.invoke(tests)


namespace = Collection(sync, build, tests, lint, mypy, smoke, ci)
