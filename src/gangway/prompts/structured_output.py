"""LLMに提示する構造化出力スキーマと指示文。"""

import copy
import json
from typing import Any

from fastmcp import FastMCP

_ACTION_SCHEMA: dict[str, Any] = {
    "name": "Action",
    "description": "An action to be executed in the system",
    "type": "object",
    "properties": {
        "kind": {
            "type": "string",
            "enum": ["file", "shell", "start", "build", "supabase"],
            "description": "The kind of action to execute",
        },
        "content": {
            "type": "string",
            "description": "The file content or the command to execute",
        },
        "filePath": {
            "type": "string",
            "description": "Path to the file (required for file actions)",
        },
        "operation": {
            "type": "string",
            "enum": ["migration", "query"],
            "description": "Operation type for supabase actions",
        },
        "projectId": {
            "type": "string",
            "description": "Project ID for supabase actions",
        },
    },
    "required": ["kind", "content"],
}

_ARTIFACT_SCHEMA: dict[str, Any] = {
    "name": "Artifact",
    "description": "A named bundle of actions, executed in the listed order",
    "type": "object",
    "properties": {
        "id": {
            "type": "string",
            "description": "Unique identifier for the artifact",
        },
        "title": {
            "type": "string",
            "description": "Human-readable title for the artifact",
        },
        "actions": {
            "type": "array",
            "items": {"$ref": "#/definitions/Action"},
            "description": "List of actions to execute",
        },
    },
    "required": ["id", "title", "actions"],
}

_RESPONSE_SCHEMA: dict[str, Any] = {
    "name": "Response",
    "description": "Complete assistant response with optional artifacts",
    "type": "object",
    "properties": {
        "message": {
            "type": "string",
            "description": "The main message of the response",
        },
        "artifacts": {
            "type": "array",
            "items": {"$ref": "#/definitions/Artifact"},
            "description": "Optional list of artifacts to create",
        },
        "metadata": {
            "type": "object",
            "properties": {
                "timestamp": {
                    "type": "string",
                    "format": "date-time",
                },
                "responseType": {
                    "type": "string",
                    "enum": ["text", "artifact", "mixed"],
                },
                "executionMode": {
                    "type": "string",
                    "enum": ["immediate", "dry-run", "preview"],
                },
            },
        },
    },
    "required": ["message"],
}

_ARTIFACT_CALLBACK_SCHEMA: dict[str, Any] = {
    "name": "ArtifactCallback",
    "description": "Payload reported when an artifact has been fully streamed",
    "type": "object",
    "properties": {
        "artifactId": {
            "type": "string",
            "description": "Identifier of the completed artifact",
        },
        "messageId": {
            "type": "string",
            "description": "Identifier of the message that carried the artifact",
        },
        "artifacts": {
            "type": "array",
            "items": {"$ref": "#/definitions/Artifact"},
        },
    },
    "required": ["artifactId", "messageId", "artifacts"],
}

_STRUCTURED_OUTPUT_SCHEMAS: dict[str, Any] = {
    "action": _ACTION_SCHEMA,
    "artifact": _ARTIFACT_SCHEMA,
    "response": _RESPONSE_SCHEMA,
    "artifactCallback": _ARTIFACT_CALLBACK_SCHEMA,
}

_SCHEMA_JSON = json.dumps(_STRUCTURED_OUTPUT_SCHEMAS, indent=2)

STRUCTURED_OUTPUT_INSTRUCTIONS = """
## Structured Output Requirements

When creating artifacts or taking actions, you MUST return valid JSON with proper structure.

### Valid JSON Schema Example:
```json
{
  "message": "Your explanation here",
  "artifacts": [
    {
      "id": "unique-id",
      "title": "Artifact Title",
      "actions": [
        {
          "kind": "file",
          "filePath": "path/to/file.ts",
          "content": "file content here"
        },
        {
          "kind": "shell",
          "content": "npm install"
        },
        {
          "kind": "start",
          "content": "npm run dev"
        }
      ]
    }
  ]
}
```

### Critical Rules:
1. ALWAYS return valid JSON - no malformed or invalid syntax
2. ALWAYS include proper quotation marks and escaping
3. NEVER include trailing commas in JSON
4. NEVER include comments in JSON
5. Validate your JSON structure before responding

### Destructive Command Warnings:
If you use destructive commands (rm, rmdir, dd, > truncation, etc), include a warning in the message explaining the operation.

### Safety First:
- Always prefer non-destructive alternatives when possible
- Warn the user before executing destructive operations
"""


def get_structured_output_schemas() -> dict[str, Any]:
    """プロンプト用スキーマ文書のコピーを返す。"""
    return copy.deepcopy(_STRUCTURED_OUTPUT_SCHEMAS)


def get_json_schema_for_llm() -> str:
    """プロンプト用スキーマ文書をJSON文字列で返す。"""
    return _SCHEMA_JSON


def build_structured_output_prompt() -> str:
    """指示文とスキーマ文書を連結したシステムプロンプト断片を返す。"""
    return (
        STRUCTURED_OUTPUT_INSTRUCTIONS
        + "\n### JSON Schema:\n```json\n"
        + _SCHEMA_JSON
        + "\n```\n"
    )


def register_structured_output_prompts(mcp: FastMCP) -> None:
    """構造化出力関連のMCPプロンプトを登録する。"""

    @mcp.prompt()
    async def structured_output_instructions() -> str:
        """構造化出力の形式をLLMに指示するためのプロンプト。

        Action / Artifact / Response のスキーマ文書と、
        破壊的コマンドの扱いを含む出力ルールを返します。
        """
        return build_structured_output_prompt()
