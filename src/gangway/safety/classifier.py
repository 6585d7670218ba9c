"""破壊的コマンドの判定ロジック。"""

import logging

from gangway.models.command import Classification
from gangway.safety.patterns import DESTRUCTIVE_COMMAND_PATTERNS, DestructivePattern

logger = logging.getLogger(__name__)


def classify_command(
    command: str,
    patterns: tuple[DestructivePattern, ...] = DESTRUCTIVE_COMMAND_PATTERNS,
) -> Classification:
    """コマンドが破壊的かどうかを判定する。

    前後の空白を除去して小文字化した後、パターン表を宣言順に走査し、
    最初に一致したパターンの理由と深刻度を返す（first-match-wins）。

    小文字化はクォート内の文字列にも及ぶため、引数中のリテラルによって
    誤検知・見逃しが起こりうる。既知の制約として扱う。

    Args:
        command: 判定対象のシェルコマンド。
        patterns: パターン表。通常はデフォルトを使用する。

    Returns:
        判定結果。一致しない場合は is_destructive=False。
    """
    normalized = command.strip().lower()

    for entry in patterns:
        if entry.pattern.search(normalized):
            logger.info("Destructive command detected [%s]: %s", entry.severity, entry.reason)
            return Classification(is_destructive=True, reason=entry.reason, severity=entry.severity)

    return Classification(is_destructive=False)
