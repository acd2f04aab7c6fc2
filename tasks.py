#!/usr/bin/env python3
"""Invoke tasks for lut-grade-engine project automation."""

import shutil
import sys
from pathlib import Path

from invoke.context import Context
from invoke.tasks import task

# Ensure UTF-8 encoding for Windows console (for emoji support)
if sys.platform == "win32":
    if sys.stdout.encoding != "utf-8":
        sys.stdout.reconfigure(encoding="utf-8")
    if sys.stderr.encoding != "utf-8":
        sys.stderr.reconfigure(encoding="utf-8")

PACKAGE = "lut_grade_engine"


@task
def clean(_: Context) -> None:
    """Remove build output and tool caches."""
    print("🧹 Cleaning build artifacts and cache files...")

    for pattern in ["build", "dist", "htmlcov", ".coverage", "coverage.xml"]:
        path = Path(pattern)
        if path.is_dir():
            print(f"  Removing directory: {path}")
            shutil.rmtree(path, ignore_errors=True)
        elif path.is_file():
            print(f"  Removing file: {path}")
            path.unlink(missing_ok=True)

    for pattern in ["*.egg-info", "__pycache__", ".pytest_cache", ".ruff_cache"]:
        for path in Path(".").glob(f"**/{pattern}"):
            print(f"  Removing directory: {path}")
            shutil.rmtree(path, ignore_errors=True)

    print("✅ Clean completed")


@task
def format(ctx: Context) -> None:
    """Format code with ruff."""
    print("🎨 Formatting code with ruff...")
    ctx.run("ruff format src tests docs")
    print("✅ Code formatting completed")


@task
def lint(ctx: Context, fix: bool = False) -> None:
    """Run linting with ruff.

    Args:
        fix: Automatically fix fixable issues (default: False)
    """
    print("🔍 Linting code with ruff...")
    cmd = "ruff check src tests"
    if fix:
        cmd += " --fix"
    ctx.run(cmd)
    print("✅ Linting completed")


@task
def typecheck(ctx: Context) -> None:
    """Run type checking with pyright."""
    print("🔬 Type checking with pyright...")
    ctx.run(f"pyright src/{PACKAGE}")
    print("✅ Type checking completed")


@task
def spell(ctx: Context, fix: bool = False) -> None:
    """Run spell checking with codespell."""
    print("📝 Spell checking with codespell...")
    ctx.run("codespell src tests" + (" --write-changes" if fix else ""))
    print("✅ Spell checking completed")


@task
def test(ctx: Context, coverage: bool = True, verbose: bool = False) -> None:
    """Run tests with pytest.

    Args:
        coverage: Generate coverage report (default: True)
        verbose: Run with verbose output (default: False)
    """
    print("🧪 Running tests with pytest...")

    cmd = "pytest"
    if coverage:
        cmd += f" --cov={PACKAGE} --cov-report=term-missing --cov-report=xml"
    if verbose:
        cmd += " -v"

    ctx.run(cmd + " tests")
    print("✅ Tests completed")


@task(pre=[format, lint, typecheck, spell])
def quality(_: Context) -> None:
    """Run format, lint, typecheck and spell checks (not tests)."""
    print("🎯 Quality checks completed successfully!")


@task(pre=[clean])
def build(ctx: Context) -> None:
    """Build sdist and wheel."""
    print("🔨 Building package...")
    ctx.run("uv build")

    dist_path = Path("dist")
    if dist_path.exists():
        print("\n📦 Built files:")
        for file in sorted(dist_path.glob("*")):
            print(f"  {file.name} ({file.stat().st_size / 1024:.1f}K)")

    print("✅ Build completed")


@task
def demo(ctx: Context) -> None:
    """Write an identity LUT with the CLI and run the usage example."""
    print("🎬 Running package demo...")
    Path("build").mkdir(exist_ok=True)
    ctx.run("lut-grade-engine --info-logging identity build/identity_17.cube --size 17")
    ctx.run("lut-grade-engine inspect build/identity_17.cube")
    ctx.run("python docs/examples/basic_usage.py")
    print("✅ Demo completed")


@task
def all(ctx: Context) -> None:
    """Run clean, quality checks, tests and build."""
    print("🎯 Running complete CI/CD pipeline...")
    clean(ctx)
    quality(ctx)
    test(ctx)
    build(ctx)
    print("🎉 Complete pipeline finished successfully!")
