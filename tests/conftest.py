"""Shared fixtures for workflow validator tests."""

import copy
import json
import logging
from pathlib import Path

import pytest

from workflow_validator.linter.report import SetResult
from workflow_validator.models.documents import DocumentSet

DRAFT_07 = "http://json-schema.org/draft-07/schema#"

SUM_WORKFLOW = {
    "name": "sum_workflow",
    "version": 1,
    "inputParameters": ["num1", "num2"],
    "tasks": [
        {
            "name": "sum_task",
            "taskReferenceName": "sum_ref",
            "type": "SIMPLE",
            "inputParameters": {
                "num1": "${workflow.input.num1}",
                "num2": "${workflow.input.num2}",
            },
        }
    ],
}

SUM_SCHEMA = {
    "name": "sum_workflow_input",
    "version": 1,
    "type": "JSON",
    "data": {
        "$schema": DRAFT_07,
        "type": "object",
        "properties": {
            "num1": {"type": "number"},
            "num2": {"type": "number"},
        },
        "required": ["num1", "num2"],
    },
}

SUM_PAYLOAD = {"num1": 5, "num2": 3}

_MISSING = object()


@pytest.fixture(autouse=True)
def reset_validator_logger():
    """Undo CLI logging setup so handlers never outlive captured streams."""
    yield
    logger = logging.getLogger("workflow_validator")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def sum_workflow():
    return copy.deepcopy(SUM_WORKFLOW)


@pytest.fixture
def sum_schema():
    return copy.deepcopy(SUM_SCHEMA)


@pytest.fixture
def make_set(tmp_path):
    """Write a workflow set below tmp_path.

    Pass ``schema=None`` / ``payload=None`` to leave a file out.
    """

    def _make(base_name="sum_workflow", workflow=_MISSING, schema=_MISSING, payload=_MISSING, subdir=""):
        directory = tmp_path / subdir if subdir else tmp_path
        workflow = copy.deepcopy(SUM_WORKFLOW) if workflow is _MISSING else workflow
        schema = copy.deepcopy(SUM_SCHEMA) if schema is _MISSING else schema
        payload = copy.deepcopy(SUM_PAYLOAD) if payload is _MISSING else payload

        workflow_path = write_json(directory / f"{base_name}.json", workflow)
        schema_path = None
        payload_path = None
        if schema is not None:
            schema_path = write_json(directory / f"{base_name}_schema.json", schema)
        if payload is not None:
            payload_path = write_json(directory / f"{base_name}_payload.json", payload)
        return DocumentSet(
            base_name=base_name,
            workflow_path=workflow_path,
            schema_path=schema_path,
            payload_path=payload_path,
        )

    return _make


@pytest.fixture
def set_result(tmp_path):
    return SetResult(DocumentSet(base_name="sum_workflow", workflow_path=tmp_path / "sum_workflow.json"))
