"""LLM構造化出力のバリデーションロジック。

例外を送出するvalidate_*系と、結果オブジェクトを返すsafe_parseは
同一の照合処理（_parse）を共有する。
"""

import logging
from types import MappingProxyType
from typing import Any, Literal

from pydantic import TypeAdapter, ValidationError

from gangway.models.errors import SchemaValidationError
from gangway.models.output import ACTION_KINDS, Action, Artifact, ArtifactCallback, Response
from gangway.models.validation import FieldError, ParseResult

logger = logging.getLogger(__name__)

SchemaName = Literal["action", "artifact", "response", "artifact_callback"]

# プロセス起動時に一度だけ構築し、以降は読み取り専用
_ADAPTERS: MappingProxyType[str, TypeAdapter[Any]] = MappingProxyType(
    {
        "action": TypeAdapter(Action),
        "artifact": TypeAdapter(Artifact),
        "response": TypeAdapter(Response),
        "artifact_callback": TypeAdapter(ArtifactCallback),
    }
)

# エラーメッセージ上の表示名
_DISPLAY_NAMES: MappingProxyType[str, str] = MappingProxyType(
    {
        "action": "Action",
        "artifact": "Artifact",
        "response": "Response",
        "artifact_callback": "ArtifactCallback",
    }
)

# 判別子の欠落・不一致を示すpydanticのエラー種別
_UNION_TAG_ERRORS = frozenset({"union_tag_invalid", "union_tag_not_found"})


def _is_union_tag(loc: tuple[int | str, ...], i: int) -> bool:
    """locのi番目がpydanticが挿入した判別共用体のタグかどうか。

    タグはActionの位置（ルート、または actions.<n> の直後）にのみ現れ、
    必ず後ろにフィールド名が続く。
    """
    if i >= len(loc) - 1 or loc[i] not in ACTION_KINDS:
        return False
    if i == 0:
        return True
    return i >= 2 and loc[i - 2] == "actions" and isinstance(loc[i - 1], int)


def _format_path(loc: tuple[int | str, ...], error_type: str) -> str:
    parts = [str(part) for i, part in enumerate(loc) if not _is_union_tag(loc, i)]
    if error_type in _UNION_TAG_ERRORS:
        parts.append("kind")
    return ".".join(parts)


def _to_field_errors(exc: ValidationError) -> tuple[FieldError, ...]:
    return tuple(
        FieldError(path=_format_path(tuple(err["loc"]), err["type"]), message=err["msg"])
        for err in exc.errors(include_url=False)
    )


def _parse(data: Any, schema: str) -> ParseResult:
    adapter = _ADAPTERS.get(schema)
    if adapter is None:
        raise ValueError(f"Unknown schema: {schema}. Expected one of: {', '.join(_ADAPTERS)}")
    try:
        value = adapter.validate_python(data)
    except ValidationError as e:
        errors = _to_field_errors(e)
        logger.debug("%s validation failed with %d error(s)", _DISPLAY_NAMES[schema], len(errors))
        return ParseResult(success=False, errors=errors)
    return ParseResult(success=True, data=value)


def _parse_or_raise(data: Any, schema: str) -> Any:
    result = _parse(data, schema)
    if not result.success:
        raise SchemaValidationError(_DISPLAY_NAMES[schema], result.errors or ())
    return result.data


def validate_action(data: Any) -> Action:
    """生データをActionとして検証する。

    Raises:
        SchemaValidationError: 構造が不正な場合。
    """
    return _parse_or_raise(data, "action")  # type: ignore[no-any-return]


def validate_artifact(data: Any) -> Artifact:
    """生データをArtifactとして検証する。

    Raises:
        SchemaValidationError: 構造が不正な場合。
    """
    return _parse_or_raise(data, "artifact")  # type: ignore[no-any-return]


def validate_response(data: Any) -> Response:
    """生データをResponseとして検証する。

    Raises:
        SchemaValidationError: 構造が不正な場合。
    """
    return _parse_or_raise(data, "response")  # type: ignore[no-any-return]


def validate_artifact_callback(data: Any) -> ArtifactCallback:
    """生データをArtifactCallbackとして検証する。

    Raises:
        SchemaValidationError: 構造が不正な場合。
    """
    return _parse_or_raise(data, "artifact_callback")  # type: ignore[no-any-return]


def safe_parse(data: Any, schema: SchemaName) -> ParseResult:
    """例外を送出せずに検証し、結果オブジェクトを返す。

    入力がdict以外（None、配列、プリミティブ）でも送出しない。

    Args:
        data: 検証対象の生データ。
        schema: 検証先スキーマ（"action" / "artifact" / "response" / "artifact_callback"）。

    Returns:
        成功時はdataに型付きの値、失敗時はerrorsに全違反を持つParseResult。

    Raises:
        ValueError: schemaが未知の場合。
    """
    return _parse(data, schema)
