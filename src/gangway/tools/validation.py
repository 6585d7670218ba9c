"""構造化出力バリデーションのMCPツール定義。"""

from typing import Any

from fastmcp import FastMCP

from gangway.models.errors import GangwayError
from gangway.services.screening import ScreeningService
from gangway.validators.structured import safe_parse, validate_artifact


def register_validation_tools(mcp: FastMCP, screening_service: ScreeningService) -> None:
    """バリデーション関連のMCPツールを登録する。"""

    @mcp.tool()
    async def validate_llm_output(schema_name: str, payload: Any) -> dict[str, Any]:
        """LLM出力をスキーマに照らして検証する。

        違反は全件をパス付きで返します（最初の1件で打ち切りません）。

        Args:
            schema_name: 検証先スキーマ（"action" / "artifact" / "response" / "artifact_callback"）。
            payload: 検証対象のJSONデータ。
        """
        try:
            return safe_parse(payload, schema_name).to_payload()  # type: ignore[arg-type]
        except ValueError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def review_artifact_commands(artifact: dict[str, Any]) -> dict[str, Any]:
        """アーティファクトを検証し、含まれるコマンドをドライラン評価する。

        shell / start / build アクションのコマンドを実行順に判定します。
        コマンドは実行されません。

        Args:
            artifact: アーティファクトのJSONデータ。
        """
        try:
            validated = validate_artifact(artifact)
            reviews = screening_service.review_artifact(validated)
            return {
                "artifactId": validated.id,
                "reviews": [r.to_payload() for r in reviews],
                "destructiveCount": len(screening_service.destructive_reviews(reviews)),
            }
        except GangwayError as e:
            return {"error": type(e).__name__, "message": str(e)}
