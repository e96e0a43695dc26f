"""Tests for workflow definition structure validation."""

import pytest

from workflow_validator.exceptions import StructuralError
from workflow_validator.linter.workflow_linter import WorkflowStructureValidator


@pytest.fixture
def validator():
    return WorkflowStructureValidator()


class TestWorkflowStructure:
    """Tests for WorkflowStructureValidator.validate."""

    def test_valid_workflow(self, validator, sum_workflow, set_result, tmp_path):
        workflow = validator.validate(sum_workflow, tmp_path / "wf.json", set_result)

        assert workflow.name == "sum_workflow"
        assert workflow.version == 1
        assert workflow.input_parameters == ["num1", "num2"]
        assert len(workflow.tasks) == 1
        task = workflow.tasks[0]
        assert task.task_reference_name == "sum_ref"
        assert task.type == "SIMPLE"
        assert task.index == 0
        assert task.input_parameters["num1"] == "${workflow.input.num1}"
        assert set_result.entries == []

    def test_missing_fields_reported_together(self, validator, set_result, tmp_path):
        with pytest.raises(StructuralError) as exc_info:
            validator.validate({"name": "wf"}, tmp_path / "wf.json", set_result)

        message = str(exc_info.value)
        assert "missing required fields: version, tasks, inputParameters" in message
        assert "wf.json" in message

    def test_non_object_document(self, validator, set_result, tmp_path):
        with pytest.raises(StructuralError, match="must be a JSON object"):
            validator.validate([1, 2], tmp_path / "wf.json", set_result)

    def test_tasks_must_be_list(self, validator, sum_workflow, set_result, tmp_path):
        sum_workflow["tasks"] = {"name": "t"}
        with pytest.raises(StructuralError, match="'tasks' must be a list"):
            validator.validate(sum_workflow, tmp_path / "wf.json", set_result)

    def test_input_parameters_must_be_names(self, validator, sum_workflow, set_result, tmp_path):
        sum_workflow["inputParameters"] = {"num1": 1}
        with pytest.raises(StructuralError, match="'inputParameters' must be a list"):
            validator.validate(sum_workflow, tmp_path / "wf.json", set_result)

    def test_invalid_tasks_reported_individually(self, validator, sum_workflow, set_result, tmp_path):
        sum_workflow["tasks"] = [
            {"name": "a", "type": "SIMPLE"},
            {"name": "b", "taskReferenceName": "b_ref", "type": "SIMPLE"},
            {"taskReferenceName": "c_ref"},
        ]

        with pytest.raises(StructuralError, match="2 invalid task"):
            validator.validate(sum_workflow, tmp_path / "wf.json", set_result)

        errors = [e.message for e in set_result.errors]
        assert len(errors) == 2
        assert "Task at index 0 ('a')" in errors[0]
        assert "taskReferenceName" in errors[0]
        assert "Task at index 2" in errors[1]
        assert "name, type" in errors[1]

    def test_task_error_includes_source_location(self, validator, sum_workflow, set_result, tmp_path):
        sum_workflow["tasks"] = [{"name": "a"}]
        source_map = {"/tasks/0": {"line": 7, "column": 5}}
        path = tmp_path / "wf.json"

        with pytest.raises(StructuralError):
            validator.validate(sum_workflow, path, set_result, source_map=source_map)

        error = set_result.errors[0]
        assert f"{path}:7:5" in error.message
        assert error.location.line == 7
        assert error.location.json_path == "/tasks/0"

    def test_task_input_parameters_must_be_object(self, validator, sum_workflow, set_result, tmp_path):
        sum_workflow["tasks"][0]["inputParameters"] = ["num1"]
        with pytest.raises(StructuralError):
            validator.validate(sum_workflow, tmp_path / "wf.json", set_result)
        assert "not an object" in set_result.errors[0].message

    def test_task_without_input_parameters(self, validator, sum_workflow, set_result, tmp_path):
        del sum_workflow["tasks"][0]["inputParameters"]
        workflow = validator.validate(sum_workflow, tmp_path / "wf.json", set_result)
        assert workflow.tasks[0].input_parameters == {}

    def test_empty_tasks_and_name_are_warnings(self, validator, sum_workflow, set_result, tmp_path):
        sum_workflow["tasks"] = []
        sum_workflow["name"] = ""

        workflow = validator.validate(sum_workflow, tmp_path / "wf.json", set_result)

        assert workflow.tasks == []
        assert set_result.errors == []
        warnings = [w.message for w in set_result.warnings]
        assert any("empty 'name'" in w for w in warnings)
        assert any("does not define any tasks" in w for w in warnings)
