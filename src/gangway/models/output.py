"""LLM構造化出力（Action / Artifact / Response）のデータモデル。

入力はcamelCaseのJSONを想定し、エイリアス経由でのみ受け付ける。
全モデルは閉じたスキーマ（未知フィールドを拒否）かつイミュータブル。
"""

import re
from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, StrictStr

ActionKind = Literal["file", "shell", "start", "build", "supabase"]

# 宣言順 = Actionユニオンの照合順
ACTION_KINDS: tuple[str, ...] = ("file", "shell", "start", "build", "supabase")

SupabaseOperation = Literal["migration", "query"]
ResponseType = Literal["text", "artifact", "mixed"]
ExecutionMode = Literal["immediate", "dry-run", "preview"]

NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]

# 拡張形式のみ: YYYY-MM-DDTHH:MM:SS[.f][Z|±HH:MM]
_ISO_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})?$")


def _check_iso_datetime(value: str) -> str:
    if not _ISO_DATETIME_RE.match(value):
        raise ValueError(f"Invalid ISO-8601 date-time: {value}")
    try:
        datetime.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid ISO-8601 date-time: {value}") from None
    return value


def _reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("Field may be omitted but must not be null")
    return value


IsoDateTimeStr = Annotated[StrictStr, AfterValidator(_check_iso_datetime)]
NotNull = BeforeValidator(_reject_null)


class OutputModel(BaseModel):
    """構造化出力モデルの共通設定。"""

    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_payload(self) -> dict[str, Any]:
        """入力と同じcamelCase形式のdictに戻す。未設定の任意フィールドは含めない。"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FileAction(OutputModel):
    """ファイル書き込みアクション。contentは空文字列を許容する。"""

    kind: Literal["file"]
    file_path: NonEmptyStr = Field(alias="filePath")
    content: StrictStr


class ShellAction(OutputModel):
    """シェルコマンド実行アクション。"""

    kind: Literal["shell"]
    content: NonEmptyStr


class StartAction(OutputModel):
    """開発サーバー等の起動アクション。"""

    kind: Literal["start"]
    content: NonEmptyStr


class BuildAction(OutputModel):
    """ビルドアクション。"""

    kind: Literal["build"]
    content: NonEmptyStr


class SupabaseAction(OutputModel):
    """Supabaseに対するマイグレーション・クエリアクション。"""

    kind: Literal["supabase"]
    operation: SupabaseOperation
    content: NonEmptyStr
    file_path: Annotated[StrictStr | None, NotNull] = Field(default=None, alias="filePath")
    project_id: Annotated[StrictStr | None, NotNull] = Field(default=None, alias="projectId")


Action = Annotated[
    FileAction | ShellAction | StartAction | BuildAction | SupabaseAction,
    Field(discriminator="kind"),
]


class Artifact(OutputModel):
    """実行順に並んだアクションの束。"""

    id: NonEmptyStr
    title: NonEmptyStr
    actions: tuple[Action, ...]


class ResponseMetadata(OutputModel):
    """レスポンスの付随情報。"""

    timestamp: Annotated[IsoDateTimeStr | None, NotNull] = None
    response_type: Annotated[ResponseType | None, NotNull] = Field(default=None, alias="responseType")
    execution_mode: Annotated[ExecutionMode | None, NotNull] = Field(
        default=None, alias="executionMode"
    )


class Response(OutputModel):
    """アシスタントの応答全体。

    artifactsの省略（None）と空タプルは区別する。任意フィールドに明示的なnullは許容しない。
    """

    message: NonEmptyStr
    artifacts: Annotated[tuple[Artifact, ...] | None, NotNull] = None
    metadata: Annotated[ResponseMetadata | None, NotNull] = None


class ArtifactCallback(OutputModel):
    """ストリーミング層がアーティファクト完了時に返すペイロード。"""

    artifact_id: NonEmptyStr = Field(alias="artifactId")
    message_id: NonEmptyStr = Field(alias="messageId")
    artifacts: tuple[Artifact, ...]
