from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable

import pytest
import yaml

from bootcs_schema.models import json_schema_loader


def lines_text(count: int) -> str:
    """Text whose naive ``\\n`` split yields exactly ``count`` segments."""
    return "\n".join(f"line {i}" for i in range(1, count + 1))


def write_stage(
    stages_dir: Path,
    name: str,
    *,
    manifest: dict | None = None,
    readme_lines: int | None = 40,
    learning_lines: int | None = 80,
) -> Path:
    stage_dir = stages_dir / name
    stage_dir.mkdir(parents=True, exist_ok=True)
    if manifest is not None:
        (stage_dir / "stage.yml").write_text(yaml.safe_dump(manifest, sort_keys=False), encoding="utf-8")
    if readme_lines is not None:
        (stage_dir / "README.md").write_text(lines_text(readme_lines), encoding="utf-8")
    if learning_lines is not None:
        (stage_dir / "LEARNING.md").write_text(lines_text(learning_lines), encoding="utf-8")
    return stage_dir


def stage_manifest(slug: str, **extra) -> dict:
    return {"slug": slug, "name": slug.replace("-", " ").title(), **extra}


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterable[None]:
    """The CLI reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    before, level = set(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in before and type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture(autouse=True)
def _fresh_schema_cache() -> Iterable[None]:
    json_schema_loader.clear_cache()
    yield
    json_schema_loader.clear_cache()


@pytest.fixture
def make_course(tmp_path: Path) -> Callable[..., Path]:
    """Build a course tree whose stages all pass by default."""

    def _make(stages: Iterable[str] = ("hello", "loops"), *, stage_order: list | None = None) -> Path:
        root = tmp_path / "course"
        stages = list(stages)
        root.mkdir(parents=True, exist_ok=True)
        course = {
            "slug": "cs50-python",
            "name": "CS50 Python",
            "description": "Intro course",
            "language": "python",
            "stage_order": list(stages) if stage_order is None else stage_order,
        }
        (root / "course.yml").write_text(yaml.safe_dump(course, sort_keys=False), encoding="utf-8")
        stages_dir = root / "stages"
        stages_dir.mkdir(exist_ok=True)
        for name in stages:
            write_stage(stages_dir, name, manifest=stage_manifest(name))
        return root

    return _make
