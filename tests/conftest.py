"""テスト共通フィクスチャ。"""

import pytest
from fastmcp import FastMCP

from gangway.config import ServerConfig
from gangway.safety.dry_run import DryRunValidator
from gangway.server import create_server
from gangway.services.screening import ScreeningService


@pytest.fixture
def dry_run_validator() -> DryRunValidator:
    """テスト用DryRunValidator。"""
    return DryRunValidator()


@pytest.fixture
def screening_service(dry_run_validator: DryRunValidator) -> ScreeningService:
    """テスト用ScreeningService。"""
    return ScreeningService(validator=dry_run_validator)


@pytest.fixture
def server_config(monkeypatch: pytest.MonkeyPatch) -> ServerConfig:
    """環境変数で上書きしたServerConfig。"""
    monkeypatch.setenv("GANGWAY_PORT", "9100")
    monkeypatch.setenv("GANGWAY_LOG_LEVEL", "DEBUG")
    return ServerConfig()


@pytest.fixture
def mcp_server() -> FastMCP:
    """テスト用MCPサーバー。"""
    return create_server()
