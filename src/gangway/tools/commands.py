"""シェルコマンド判定のMCPツール定義。"""

from typing import Any

from fastmcp import FastMCP

from gangway.safety.classifier import classify_command as _classify_command
from gangway.safety.dry_run import DryRunValidator
from gangway.safety.dry_run import make_dry_run_safe as _make_dry_run_safe


def register_command_tools(mcp: FastMCP, dry_run_validator: DryRunValidator) -> None:
    """コマンド判定関連のMCPツールを登録する。"""

    @mcp.tool()
    async def classify_command(command: str) -> dict[str, Any]:
        """シェルコマンドが破壊的かどうかを判定する。

        Args:
            command: 判定対象のシェルコマンド。
        """
        return _classify_command(command).to_payload()

    @mcp.tool()
    async def dry_run_command(command: str) -> dict[str, Any]:
        """シェルコマンドをドライランとして評価する。

        破壊的な場合は警告文と、実行しても副作用のない代替コマンドを返します。
        コマンドは実行されません。

        Args:
            command: 評価対象のシェルコマンド。
        """
        return dry_run_validator.evaluate(command).to_payload()

    @mcp.tool()
    async def make_dry_run_safe(command: str) -> dict[str, Any]:
        """シェルコマンドを副作用のないプレビューコマンドに変換する。

        Args:
            command: 変換対象のシェルコマンド。
        """
        return {"command": command, "dryRunCommand": _make_dry_run_safe(command)}
