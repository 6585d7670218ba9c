"""構造化出力バリデーション結果のデータモデル。"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from gangway.models.output import OutputModel


class FieldError(BaseModel):
    """単一フィールドの検証エラー。"""

    model_config = ConfigDict(frozen=True)

    path: str
    message: str


class ParseResult(BaseModel):
    """safe_parseの結果。成功時はdata、失敗時はerrorsを持つ。"""

    model_config = ConfigDict(frozen=True)

    success: bool
    data: Any | None = None
    errors: tuple[FieldError, ...] | None = None

    def to_payload(self) -> dict[str, Any]:
        """ツール応答用のJSON互換dictに変換する。"""
        if self.success:
            data = self.data.to_payload() if isinstance(self.data, OutputModel) else self.data
            return {"success": True, "data": data}
        return {
            "success": False,
            "errors": [e.model_dump() for e in self.errors or ()],
        }
