"""破壊的コマンド判定・ドライラン関連のデータモデル。"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Severity = Literal["critical", "high", "medium"]


class _CommandModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """camelCaseのdictに変換する。該当しない任意フィールドは含めない。"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Classification(_CommandModel):
    """コマンドの破壊性判定結果。reason/severityは破壊的な場合のみ設定される。"""

    is_destructive: bool
    reason: str | None = None
    severity: Severity | None = None


class DryRunReport(_CommandModel):
    """ドライラン評価のレポート。実行結果ではなく助言データ。"""

    is_dry_run: Literal[True] = True
    command: str
    classification: Classification
    warning: str | None = None
    dry_run_command: str | None = None

    @property
    def is_destructive(self) -> bool:
        return self.classification.is_destructive


class ActionReview(_CommandModel):
    """アーティファクト内の1アクションに対するドライラン評価。"""

    artifact_id: str
    index: int
    kind: str
    report: DryRunReport
