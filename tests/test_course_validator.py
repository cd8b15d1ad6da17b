from pathlib import Path

import yaml

from bootcs_schema.validator import CourseValidator, validate_course
from bootcs_schema.validator.course_validator import get_stage_order

from conftest import stage_manifest, write_stage


def test_valid_course_passes(make_course) -> None:
    root = make_course(["hello", "loops", "functions"])

    result = validate_course(root)

    assert result.valid
    assert result.error_count == 0
    assert result.stage_count == 3
    assert result.warnings == []
    assert "course.yml: schema valid" in result.infos


def test_missing_course_manifest_is_fatal(make_course) -> None:
    root = make_course()
    (root / "course.yml").unlink()

    result = validate_course(root)

    assert not result.valid
    assert result.stage_count == 0
    assert result.errors == ["course.yml not found"]


def test_missing_stages_dir_is_fatal(tmp_path: Path) -> None:
    (tmp_path / "course.yml").write_text("slug: c\nname: C\nstage_order: []\n", encoding="utf-8")

    result = validate_course(tmp_path)

    assert not result.valid
    assert result.stage_count == 0
    assert result.errors == ["stages/ directory not found"]
    assert result.infos == []


def test_both_preconditions_reported(tmp_path: Path) -> None:
    result = validate_course(tmp_path)

    assert result.error_count == 2
    assert result.stage_count == 0


def test_slug_mismatch_yields_single_error(make_course) -> None:
    root = make_course(["foo"])
    (root / "stages" / "foo" / "stage.yml").write_text(
        yaml.safe_dump(stage_manifest("bar")), encoding="utf-8"
    )

    result = validate_course(root)

    assert result.error_count == 1
    [error] = result.errors
    assert "'foo'" in error
    assert "'bar'" in error


def test_declared_stage_without_directory_is_error(make_course) -> None:
    root = make_course(["hello"], stage_order=["hello", "ghost"])

    result = validate_course(root)

    assert result.errors == ["stage_order: 'ghost' declared but directory not found"]
    assert result.warnings == []


def test_undeclared_directory_is_warning_only(make_course) -> None:
    root = make_course(["hello", "extra"], stage_order=["hello"])

    result = validate_course(root)

    assert result.valid
    assert result.warnings == ["stages/extra: directory exists but not in stage_order"]


def test_ordering_checks_fire_together(make_course) -> None:
    root = make_course(["hello", "extra"], stage_order=["hello", "ghost"])

    result = validate_course(root)

    assert result.errors == ["stage_order: 'ghost' declared but directory not found"]
    assert result.warnings == ["stages/extra: directory exists but not in stage_order"]
    # ordering findings come after every stage finding
    assert result.messages[-2:] == [
        "❌ stage_order: 'ghost' declared but directory not found",
        "⚠️  stages/extra: directory exists but not in stage_order",
    ]


def test_stage_count_ignores_plain_files(make_course) -> None:
    root = make_course(["hello", "loops"])
    (root / "stages" / "notes.txt").write_text("scratch", encoding="utf-8")
    (root / "stages" / "broken").mkdir()

    result = validate_course(root)

    assert result.stage_count == 3
    # the empty directory fails every per-stage check but is still counted
    assert "stages/broken/stage.yml: missing" in result.errors
    assert "stages/broken: directory exists but not in stage_order" in result.warnings


def test_course_schema_failure_does_not_abort(make_course) -> None:
    root = make_course(["hello"])
    (root / "course.yml").write_text("name: No slug\nstage_order:\n  - hello\n", encoding="utf-8")

    result = validate_course(root)

    assert result.error_count == 1
    assert result.errors[0].startswith("course.yml schema:")
    assert "'slug' is a required property" in result.errors[0]
    assert result.stage_count == 1
    assert result.warnings == []


def test_unparseable_course_manifest_continues_with_empty_order(make_course) -> None:
    root = make_course(["hello"])
    (root / "course.yml").write_text("stage_order: [hello\n", encoding="utf-8")

    result = validate_course(root)

    assert result.stage_count == 1
    assert result.errors[0].startswith("course.yml: Failed to parse YAML")
    assert result.warnings == ["stages/hello: directory exists but not in stage_order"]


def test_duplicate_missing_slug_reported_once(make_course) -> None:
    root = make_course(["hello"], stage_order=["hello", "ghost", "ghost"])

    result = validate_course(root)

    assert result.errors.count("stage_order: 'ghost' declared but directory not found") == 1


def test_messages_follow_discovery_order(make_course) -> None:
    root = make_course(["beta", "alpha"], stage_order=["beta", "alpha"])
    (root / "stages" / "alpha" / "README.md").unlink()
    (root / "stages" / "beta" / "LEARNING.md").unlink()

    result = validate_course(root)

    assert result.messages == [
        "✅ course.yml: schema valid",
        "❌ stages/alpha/README.md: missing",
        "✅ stages/alpha/stage.yml: valid",
        "❌ stages/beta/LEARNING.md: missing",
        "✅ stages/beta/stage.yml: valid",
    ]


def test_repeated_runs_are_identical(make_course) -> None:
    root = make_course(["c", "a", "b"], stage_order=["a", "missing"])
    write_stage(root / "stages", "d", manifest=stage_manifest("x"), readme_lines=3)

    validator = CourseValidator(verbose=True)
    first = validator.validate_course(root)
    second = validator.validate_course(root)

    assert first.messages == second.messages
    assert first.messages == validate_course(root, verbose=True).messages


def test_get_stage_order_tolerates_malformed_values() -> None:
    assert get_stage_order({}) == []
    assert get_stage_order({"stage_order": "hello"}) == []
    assert get_stage_order({"stage_order": ["a", 3, None, "b"]}) == ["a", "b"]


def _denied(path) -> PermissionError:
    return PermissionError(13, "Permission denied", str(path))


def test_self_referencing_course_manifest_is_reported(make_course) -> None:
    root = make_course(["hello"])
    (root / "course.yml").write_text(
        "slug: c\nname: C\nstage_order: [hello]\nloop: &x [*x]\n", encoding="utf-8"
    )

    result = validate_course(root)

    assert result.stage_count == 1
    assert result.errors[0].startswith("course.yml schema: Document cannot be represented as JSON")
    assert result.warnings == ["stages/hello: directory exists but not in stage_order"]


def test_unlistable_stages_dir_is_error(make_course, monkeypatch) -> None:
    root = make_course(["hello"])
    real_iterdir = Path.iterdir

    def iterdir(self):
        if self.name == "stages":
            raise _denied(self)
        return real_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", iterdir)

    result = validate_course(root)

    assert result.stage_count == 0
    assert result.errors == [
        "stages/: cannot list directory: Permission denied",
        "stage_order: 'hello' declared but directory not found",
    ]


def test_unreadable_course_manifest_is_error(make_course, monkeypatch) -> None:
    root = make_course(["hello"])
    validator = CourseValidator()
    real_read_text = Path.read_text

    def read_text(self, *args, **kwargs):
        if self.name == "course.yml":
            raise _denied(self)
        return real_read_text(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", read_text)

    result = validator.validate_course(root)

    assert result.errors[0].startswith("course.yml: Failed to read")
    assert result.stage_count == 1


def test_inaccessible_course_manifest_stops_the_run(make_course, monkeypatch) -> None:
    root = make_course(["hello"])
    real_exists = Path.exists

    def exists(self, *args, **kwargs):
        if self.name == "course.yml":
            raise _denied(self)
        return real_exists(self, *args, **kwargs)

    monkeypatch.setattr(Path, "exists", exists)

    result = validate_course(root)

    assert result.errors == ["course.yml: cannot access: Permission denied"]
    assert result.stage_count == 0
