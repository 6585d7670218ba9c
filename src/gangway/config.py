"""Gangwayサーバーの設定管理。"""

from pydantic_settings import BaseSettings


class ServerConfig(BaseSettings):
    """サーバー設定。環境変数から読み込み可能。"""

    model_config = {"env_prefix": "GANGWAY_"}

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
