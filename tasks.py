# type: ignore
import os

from invoke import task


@task
def venv(ctx):
    """Create the development environment with uv."""
    ctx.run("uv sync --extra test --extra dev")


@task
def lint(ctx):
    """
    Static analysis: ruff for style and errors, mypy for types.
    """
    ctx.run("ruff check src tests", pty=True)
    ctx.run("ruff format --check src", pty=True)
    ctx.run("mypy src", pty=True)


@task
def test(ctx):
    """
    Run tests with coverage information.
    """
    ctx.run("pytest --cov=src --cov-report=term-missing", pty=True)


@task
def mock_hub(ctx, port=4242):
    """Run the mock neoHub for manual testing."""
    ctx.run(f"neosmart mock --port {port}", pty=True)


@task
def build_package(ctx):
    """
    Build package using uv.
    """

    ctx.run("rm -rf dist")
    ctx.run("uv build")


@task
def release(ctx):
    """Build the package and publish it to PyPI using uv."""
    token = os.getenv("PYPI_TOKEN")
    if not token:
        raise ValueError("PYPI_TOKEN environment variable is not set")

    ctx.run("invoke build-package")
    ctx.run(f"uv publish --token {token}")
