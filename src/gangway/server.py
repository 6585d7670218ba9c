"""FastMCPベースのMCPサーバーエントリポイント。"""

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from gangway.prompts.structured_output import register_structured_output_prompts
from gangway.resources.safety import register_safety_resources
from gangway.safety.dry_run import DryRunValidator
from gangway.services.screening import ScreeningService
from gangway.tools.commands import register_command_tools
from gangway.tools.validation import register_validation_tools


def create_server() -> FastMCP:
    """Gangway MCPサーバーを作成し、ツール・リソース・プロンプトを登録する。

    Returns:
        設定済みのFastMCPインスタンス。
    """
    mcp = FastMCP("gangway")

    # サービス層
    dry_run_validator = DryRunValidator()
    screening_service = ScreeningService(validator=dry_run_validator)

    # MCPインターフェース登録: ツール
    register_validation_tools(mcp, screening_service)
    register_command_tools(mcp, dry_run_validator)

    # MCPインターフェース登録: リソース・プロンプト
    register_safety_resources(mcp)
    register_structured_output_prompts(mcp)

    # ヘルスチェックエンドポイント
    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    return mcp
