"""構造化出力バリデーションのユニットテスト。"""

from typing import Any

import pytest

from gangway.models.errors import GangwayError, SchemaValidationError
from gangway.models.output import ArtifactCallback, FileAction, ShellAction, SupabaseAction
from gangway.models.validation import ParseResult
from gangway.validators import structured
from gangway.validators.structured import (
    safe_parse,
    validate_action,
    validate_artifact,
    validate_artifact_callback,
    validate_response,
)

VALID_ACTIONS: list[dict[str, Any]] = [
    {"kind": "file", "filePath": "src/app.ts", "content": "export {}"},
    {"kind": "file", "filePath": "empty.txt", "content": ""},
    {"kind": "shell", "content": "npm install"},
    {"kind": "start", "content": "npm run dev"},
    {"kind": "build", "content": "npm run build"},
    {"kind": "supabase", "operation": "migration", "content": "create table x (id int)"},
    {
        "kind": "supabase",
        "operation": "query",
        "content": "select 1",
        "filePath": "supabase/q.sql",
        "projectId": "proj-1",
    },
]


def _paths(result: Any) -> list[str]:
    return [e.path for e in result.errors]


class TestValidateAction:
    @pytest.mark.parametrize("raw", VALID_ACTIONS)
    def test_valid_action_round_trips(self, raw: dict[str, Any]) -> None:
        action = validate_action(raw)
        assert action.kind == raw["kind"]
        assert action.to_payload() == raw

    def test_variant_type_is_selected_by_kind(self) -> None:
        assert isinstance(validate_action(VALID_ACTIONS[0]), FileAction)
        assert isinstance(validate_action(VALID_ACTIONS[2]), ShellAction)
        assert isinstance(validate_action(VALID_ACTIONS[5]), SupabaseAction)

    def test_empty_file_path_fails(self) -> None:
        with pytest.raises(SchemaValidationError) as exc_info:
            validate_action({"kind": "file", "filePath": "", "content": "x"})
        errors = exc_info.value.errors
        assert [e.path for e in errors] == ["filePath"]
        assert "at least 1 character" in errors[0].message
        assert str(exc_info.value).startswith("Invalid Action: filePath: ")

    def test_schema_error_is_gangway_error(self) -> None:
        with pytest.raises(GangwayError):
            validate_action({"kind": "shell", "content": ""})

    @pytest.mark.parametrize(
        ("raw", "missing"),
        [
            ({"kind": "file", "content": "x"}, "filePath"),
            ({"kind": "file", "filePath": "a.ts"}, "content"),
            ({"kind": "shell"}, "content"),
            ({"kind": "start"}, "content"),
            ({"kind": "build"}, "content"),
            ({"kind": "supabase", "content": "select 1"}, "operation"),
        ],
    )
    def test_missing_required_field_is_reported_at_its_path(self, raw: dict[str, Any], missing: str) -> None:
        result = safe_parse(raw, "action")
        assert result.success is False
        assert missing in _paths(result)

    def test_unknown_kind_is_rejected(self) -> None:
        result = safe_parse({"kind": "deploy", "content": "x"}, "action")
        assert result.success is False
        assert _paths(result) == ["kind"]
        assert "'file', 'shell', 'start', 'build', 'supabase'" in result.errors[0].message

    def test_missing_kind_is_rejected(self) -> None:
        result = safe_parse({"content": "npm install"}, "action")
        assert result.success is False
        assert _paths(result) == ["kind"]

    def test_extra_field_is_rejected(self) -> None:
        result = safe_parse({"kind": "shell", "content": "ls", "cwd": "/tmp"}, "action")
        assert result.success is False
        assert _paths(result) == ["cwd"]

    def test_field_of_another_variant_is_rejected(self) -> None:
        result = safe_parse({"kind": "shell", "content": "ls", "filePath": "a.ts"}, "action")
        assert result.success is False
        assert _paths(result) == ["filePath"]

    def test_invalid_supabase_operation(self) -> None:
        result = safe_parse({"kind": "supabase", "operation": "drop", "content": "x"}, "action")
        assert result.success is False
        assert _paths(result) == ["operation"]

    def test_wrong_primitive_type(self) -> None:
        result = safe_parse({"kind": "shell", "content": 42}, "action")
        assert result.success is False
        assert _paths(result) == ["content"]

    @pytest.mark.parametrize("value", [b"rm -rf /", bytearray(b"ls")])
    def test_bytes_are_not_text(self, value: Any) -> None:
        result = safe_parse({"kind": "shell", "content": value}, "action")
        assert result.success is False
        assert _paths(result) == ["content"]

    def test_bytes_file_content_is_rejected(self) -> None:
        result = safe_parse({"kind": "file", "filePath": b"a.ts", "content": b""}, "action")
        assert result.success is False
        assert sorted(_paths(result)) == ["content", "filePath"]

    @pytest.mark.parametrize("field", ["filePath", "projectId"])
    def test_null_optional_supabase_field_is_rejected(self, field: str) -> None:
        raw = {"kind": "supabase", "operation": "query", "content": "select 1", field: None}
        result = safe_parse(raw, "action")
        assert result.success is False
        assert _paths(result) == [field]
        assert "must not be null" in result.errors[0].message

    def test_supabase_without_optional_fields(self) -> None:
        action = validate_action({"kind": "supabase", "operation": "migration", "content": "create table x"})
        assert isinstance(action, SupabaseAction)
        assert action.file_path is None
        assert action.project_id is None


class TestValidateArtifact:
    def test_valid_artifact_preserves_action_order(self) -> None:
        raw = {"id": "setup", "title": "Project setup", "actions": VALID_ACTIONS}
        artifact = validate_artifact(raw)
        assert [a.kind for a in artifact.actions] == [a["kind"] for a in VALID_ACTIONS]
        assert artifact.to_payload() == raw

    def test_empty_actions_are_allowed(self) -> None:
        artifact = validate_artifact({"id": "a", "title": "t", "actions": []})
        assert artifact.actions == ()

    def test_errors_are_collected_for_every_element(self) -> None:
        raw = {
            "id": "a",
            "title": "t",
            "actions": [
                {"kind": "shell", "content": "ls"},
                {"kind": "shell", "content": ""},
                {"kind": "file", "filePath": "", "content": "x"},
                {"kind": "unknown"},
            ],
        }
        with pytest.raises(SchemaValidationError) as exc_info:
            validate_artifact(raw)
        paths = [e.path for e in exc_info.value.errors]
        assert paths == ["actions.1.content", "actions.2.filePath", "actions.3.kind"]
        assert str(exc_info.value).startswith("Invalid Artifact: ")

    def test_missing_identifier_and_title(self) -> None:
        result = safe_parse({"actions": []}, "artifact")
        assert result.success is False
        assert sorted(_paths(result)) == ["id", "title"]


class TestValidateResponse:
    def test_empty_message_fails(self) -> None:
        with pytest.raises(SchemaValidationError) as exc_info:
            validate_response({"message": ""})
        assert [e.path for e in exc_info.value.errors] == ["message"]
        assert str(exc_info.value).startswith("Invalid Response: message: ")

    def test_message_only(self) -> None:
        response = validate_response({"message": "hello"})
        assert response.message == "hello"
        assert response.artifacts is None
        assert response.metadata is None

    def test_nested_errors_have_full_paths(self) -> None:
        raw = {
            "message": "ok",
            "artifacts": [
                {"id": "a", "title": "t", "actions": [{"kind": "shell", "content": "ls"}]},
                {"id": "b", "title": "", "actions": [{"kind": "build"}, {"kind": "file", "content": "x"}]},
            ],
            "metadata": {"responseType": "other", "timestamp": "yesterday"},
        }
        result = safe_parse(raw, "response")
        assert result.success is False
        assert sorted(_paths(result)) == sorted(
            [
                "artifacts.1.title",
                "artifacts.1.actions.0.content",
                "artifacts.1.actions.1.filePath",
                "metadata.timestamp",
                "metadata.responseType",
            ]
        )

    def test_null_artifacts_is_rejected(self) -> None:
        result = safe_parse({"message": "hi", "artifacts": None}, "response")
        assert result.success is False
        assert _paths(result) == ["artifacts"]

    def test_null_metadata_fields_are_rejected(self) -> None:
        raw = {"message": "hi", "metadata": {"timestamp": None, "responseType": None, "executionMode": None}}
        result = safe_parse(raw, "response")
        assert result.success is False
        assert sorted(_paths(result)) == ["metadata.executionMode", "metadata.responseType", "metadata.timestamp"]

    def test_null_metadata_is_rejected(self) -> None:
        result = safe_parse({"message": "hi", "metadata": None}, "response")
        assert result.success is False
        assert _paths(result) == ["metadata"]

    @pytest.mark.parametrize(
        "timestamp",
        [
            "2024-05-01T10",
            "2024-05-01T10:00",
            "2024-W18-3T10:00",
            "20240501T1000",
            "2024-05-01t10:00:00Z",
            "2024-13-01T10:00:00Z",
        ],
    )
    def test_non_extended_timestamp_is_rejected(self, timestamp: str) -> None:
        result = safe_parse({"message": "hi", "metadata": {"timestamp": timestamp}}, "response")
        assert result.success is False
        assert _paths(result) == ["metadata.timestamp"]

    @pytest.mark.parametrize(
        "timestamp",
        ["2024-05-01T10:00:00Z", "2024-05-01T10:00:00.123Z", "2024-05-01T10:00:00+09:00", "2024-05-01T10:00:00"],
    )
    def test_extended_timestamp_is_accepted(self, timestamp: str) -> None:
        response = validate_response({"message": "hi", "metadata": {"timestamp": timestamp}})
        assert response.to_payload() == {"message": "hi", "metadata": {"timestamp": timestamp}}

    def test_unknown_metadata_field_is_rejected(self) -> None:
        result = safe_parse({"message": "ok", "metadata": {"model": "x"}}, "response")
        assert result.success is False
        assert _paths(result) == ["metadata.model"]

    def test_full_response_round_trips(self) -> None:
        raw = {
            "message": "Created project",
            "artifacts": [{"id": "a", "title": "t", "actions": VALID_ACTIONS[:3]}],
            "metadata": {
                "timestamp": "2024-05-01T10:00:00+09:00",
                "responseType": "artifact",
                "executionMode": "preview",
            },
        }
        assert validate_response(raw).to_payload() == raw


class TestValidateArtifactCallback:
    def test_valid_callback(self) -> None:
        callback = validate_artifact_callback(
            {"artifactId": "a", "messageId": "m", "artifacts": [{"id": "a", "title": "t", "actions": []}]}
        )
        assert isinstance(callback, ArtifactCallback)
        assert callback.message_id == "m"

    def test_empty_message_id_fails(self) -> None:
        result = safe_parse({"artifactId": "a", "messageId": "", "artifacts": []}, "artifact_callback")
        assert result.success is False
        assert _paths(result) == ["messageId"]


class TestSafeParse:
    @pytest.mark.parametrize("raw", [None, 0, 1.5, True, "text", [], [1, 2], {"a": [None]}, object()])
    @pytest.mark.parametrize("schema", ["action", "artifact", "response", "artifact_callback"])
    def test_never_raises(self, raw: Any, schema: str) -> None:
        result = safe_parse(raw, schema)  # type: ignore[arg-type]
        assert result.success is False
        assert result.errors
        assert result.data is None

    def test_success_result(self) -> None:
        result = safe_parse({"kind": "shell", "content": "npm install"}, "action")
        assert result.success is True
        assert result.errors is None
        assert result.to_payload() == {"success": True, "data": {"kind": "shell", "content": "npm install"}}

    def test_failure_payload(self) -> None:
        result = safe_parse({"message": ""}, "response")
        payload = result.to_payload()
        assert payload["success"] is False
        assert payload["errors"][0]["path"] == "message"

    def test_payload_keeps_plain_data(self) -> None:
        assert ParseResult(success=True, data={"a": 1}).to_payload() == {"success": True, "data": {"a": 1}}

    def test_unknown_schema_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="Unknown schema"):
            safe_parse({}, "widget")  # type: ignore[arg-type]

    def test_non_schema_errors_propagate(self, monkeypatch: pytest.MonkeyPatch) -> None:
        class _BrokenAdapter:
            def validate_python(self, data: Any) -> Any:
                raise RuntimeError("boom")

        monkeypatch.setattr(structured, "_ADAPTERS", {"action": _BrokenAdapter()})
        with pytest.raises(RuntimeError, match="boom"):
            validate_action({"kind": "shell", "content": "ls"})
        with pytest.raises(RuntimeError, match="boom"):
            safe_parse({"kind": "shell", "content": "ls"}, "action")

    def test_adapter_registry_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            structured._ADAPTERS["action"] = None  # type: ignore[index]
