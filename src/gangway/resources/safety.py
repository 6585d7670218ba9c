"""安全性・スキーマ関連のMCPリソース定義。"""

import yaml
from fastmcp import FastMCP

from gangway.prompts.structured_output import get_json_schema_for_llm
from gangway.safety.patterns import DESTRUCTIVE_COMMAND_PATTERNS


def register_safety_resources(mcp: FastMCP) -> None:
    """安全性・スキーマ関連のMCPリソースを登録する。"""

    @mcp.resource("gangway://schema/structured-output")
    async def structured_output_schema() -> str:
        """LLM出力のスキーマ文書を取得する。

        Action / Artifact / Response / ArtifactCallback の
        フィールド定義と必須項目をJSONで返します。
        """
        return get_json_schema_for_llm()

    @mcp.resource("gangway://safety/patterns")
    async def destructive_patterns() -> str:
        """破壊的コマンドのパターン表を取得する。

        判定は上から順に行われ、最初に一致したパターンが採用されます。
        """
        data = {
            "patterns": [
                {
                    "order": order,
                    "pattern": entry.pattern.pattern,
                    "reason": entry.reason,
                    "severity": entry.severity,
                }
                for order, entry in enumerate(DESTRUCTIVE_COMMAND_PATTERNS, start=1)
            ]
        }
        return yaml.dump(data, allow_unicode=True, default_flow_style=False, sort_keys=False)
