"""Tests for the per-set validation pipeline and run aggregation."""

import pytest

from workflow_validator.exceptions import RootNotFoundError
from workflow_validator.file_io.json_loader import JsonLoader
from workflow_validator.linter import validate_directory
from workflow_validator.linter.report import SetState
from workflow_validator.linter.runner import ValidationRunner


@pytest.fixture
def runner():
    return ValidationRunner(loader=JsonLoader(cache_enabled=False))


def _messages(entries):
    return [e.message for e in entries]


class TestValidateSet:
    """Tests for ValidationRunner.validate_set state transitions."""

    def test_complete_set_passes(self, runner, make_set):
        result = runner.validate_set(make_set())

        assert result.state == SetState.PASSED
        assert result.errors == []
        assert result.warnings == []
        assert _messages(result.entries)[-1] == "All validations passed for workflow set: sum_workflow"

    def test_missing_payload_still_passes_with_warning(self, runner, make_set):
        result = runner.validate_set(make_set(payload=None))

        assert result.state == SetState.PASSED
        assert result.errors == []
        assert len(result.warnings) == 1

    def test_missing_schema_fails_at_discovery(self, runner, make_set):
        result = runner.validate_set(make_set(schema=None))

        assert result.state == SetState.FAILED
        assert len(result.errors) == 1
        assert "Missing schema file" in result.errors[0].message

    def test_parse_error_stops_set(self, runner, make_set):
        doc_set = make_set()
        doc_set.workflow_path.write_text('{"name": ')

        result = runner.validate_set(doc_set)

        assert result.state == SetState.FAILED
        assert len(result.errors) == 1
        assert "Error parsing file" in result.errors[0].message
        assert str(doc_set.workflow_path) in result.errors[0].message

    def test_structural_error_in_schema(self, runner, make_set, sum_schema):
        sum_schema["type"] = "XML"
        result = runner.validate_set(make_set(schema=sum_schema))

        assert result.state == SetState.FAILED
        assert "Expected 'JSON', got 'XML'" in result.errors[0].message

    def test_cross_reference_failure_skips_payload(self, runner, make_set, sum_workflow):
        sum_workflow["tasks"][0]["inputParameters"]["extra"] = "${workflow.input.x}"
        result = runner.validate_set(make_set(workflow=sum_workflow, payload={"num1": "bad"}))

        assert result.state == SetState.FAILED
        errors = _messages(result.errors)
        assert len(errors) == 1
        assert 'Task "sum_task" references undefined input parameter: x' in errors[0]

    def test_invalid_payload_fails(self, runner, make_set):
        result = runner.validate_set(make_set(payload={"num1": 5}))

        assert result.state == SetState.FAILED
        errors = _messages(result.errors)
        assert errors[0].startswith("Payload validation failed for")
        assert len(errors) == 2
        assert "num2" in errors[1]

    def test_unparseable_payload_fails(self, runner, make_set):
        doc_set = make_set()
        doc_set.payload_path.write_text("not json")

        result = runner.validate_set(doc_set)

        assert result.state == SetState.FAILED
        assert str(doc_set.payload_path) in result.errors[0].message

    def test_non_finite_payload_fails_parsing(self, runner, make_set):
        doc_set = make_set()
        doc_set.payload_path.write_text('{"num1": NaN, "num2": 3}')

        result = runner.validate_set(doc_set)

        assert result.state == SetState.FAILED
        assert "Error parsing file" in result.errors[0].message

    def test_unresolvable_ref_fails_payload_stage(self, runner, make_set, sum_schema):
        sum_schema["data"]["properties"]["num1"] = {"$ref": "#/definitions/missing"}

        result = runner.validate_set(make_set(schema=sum_schema))

        assert result.state == SetState.FAILED
        messages = _messages(result.errors)
        assert len(messages) == 1
        assert messages[0].startswith("Error validating payload")
        assert not any("Error processing workflow set" in m for m in messages)

    def test_schema_name_mismatch_does_not_block(self, runner, make_set, sum_schema):
        sum_schema["name"] = "renamed"
        result = runner.validate_set(make_set(schema=sum_schema))

        assert result.state == SetState.PASSED
        assert len(result.warnings) == 1

    def test_unexpected_exception_contained(self, runner, make_set, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(runner.cross_validator, "validate", boom)
        result = runner.validate_set(make_set())

        assert result.state == SetState.FAILED
        assert "disk on fire" in result.errors[-1].message


class TestRun:
    """Tests for ValidationRunner.run aggregation."""

    def test_errors_do_not_stop_other_sets(self, runner, make_set, tmp_path):
        make_set(base_name="broken", schema=None)
        make_set(base_name="good")

        report = runner.run(tmp_path)

        assert report.total_sets == 2
        states = {r.base_name: r.state for r in report.set_results}
        assert states == {"broken": SetState.FAILED, "good": SetState.PASSED}
        assert report.passed is False
        assert len(report.errors) == 1

    def test_all_sets_pass(self, runner, make_set, tmp_path):
        make_set(base_name="one")
        make_set(base_name="two", payload=None)

        report = runner.run(tmp_path)

        assert report.passed is True
        assert len(report.passed_sets) == 2
        assert len(report.warnings) == 1

    def test_zero_sets_is_failure_with_warning(self, runner, tmp_path):
        report = runner.run(tmp_path)

        assert report.total_sets == 0
        assert report.passed is False
        assert len(report.warnings) == 1
        assert "No workflow sets found" in report.warnings[0].message

    def test_missing_root_raises(self, runner, tmp_path):
        with pytest.raises(RootNotFoundError):
            runner.run(tmp_path / "missing")

    def test_idempotent(self, runner, make_set, tmp_path):
        make_set(base_name="bad", payload={"num1": 1})
        make_set(base_name="good")

        first = runner.run(tmp_path)
        second = runner.run(tmp_path)

        assert first.passed == second.passed
        assert _messages(first.errors) == _messages(second.errors)
        assert _messages(first.warnings) == _messages(second.warnings)

    def test_rerun_sees_edited_documents(self, make_set, tmp_path):
        doc_set = make_set(payload={"num1": 1})
        runner = ValidationRunner(loader=JsonLoader(cache_enabled=True))

        assert runner.run(tmp_path).passed is False

        doc_set.payload_path.write_text('{"num1": 1, "num2": 2}')
        assert runner.run(tmp_path).passed is True

    def test_parallel_matches_serial(self, make_set, tmp_path):
        for index in range(6):
            make_set(base_name=f"wf{index}", payload={"num1": index} if index % 2 else None)

        serial = ValidationRunner(loader=JsonLoader(cache_enabled=False), jobs=1).run(tmp_path)
        parallel = ValidationRunner(loader=JsonLoader(cache_enabled=False), jobs=4).run(tmp_path)

        assert [r.base_name for r in parallel.set_results] == [r.base_name for r in serial.set_results]
        assert [r.state for r in parallel.set_results] == [r.state for r in serial.set_results]
        assert _messages(parallel.errors) == _messages(serial.errors)
        assert _messages(parallel.warnings) == _messages(serial.warnings)

    def test_validate_directory_helper(self, make_set, tmp_path):
        make_set()
        assert validate_directory(tmp_path).passed is True

    def test_report_to_dict(self, runner, make_set, tmp_path):
        make_set(base_name="bad", schema=None)

        data = runner.run(tmp_path).to_dict()

        assert data["passed"] is False
        assert data["sets"] == 1
        assert data["errors"] == 1
        assert data["results"][0]["name"] == "bad"
        assert data["results"][0]["state"] == "failed"
