"""破壊的シェルコマンドのパターン表。

並び順は判定結果を左右する契約であり、変更してはならない。
先頭の "rm" パターンが後続の "rm -r" / "rm -rf" パターンを常に覆い隠すが、
どの優先順位が正しいかは未決のため現状の順序を維持する。
"""

import re
from dataclasses import dataclass

from gangway.models.command import Severity


@dataclass(frozen=True)
class DestructivePattern:
    """破壊的コマンドの形状1件。"""

    pattern: re.Pattern[str]
    reason: str
    severity: Severity


# 小文字化済みのコマンドに対して re.search で適用する
DESTRUCTIVE_COMMAND_PATTERNS: tuple[DestructivePattern, ...] = (
    DestructivePattern(re.compile(r"^\s*rm\s+"), "rm command (file deletion)", "critical"),
    DestructivePattern(re.compile(r"^\s*rmdir\s+"), "rmdir command (directory deletion)", "critical"),
    DestructivePattern(re.compile(r"^\s*rm\s+-r"), "rm -r command (recursive deletion)", "critical"),
    DestructivePattern(re.compile(r"^\s*rm\s+-rf"), "rm -rf command (force recursive deletion)", "critical"),
    DestructivePattern(re.compile(r"^\s*>.*\w"), "file truncation with > operator", "high"),
    DestructivePattern(re.compile(r"^\s*:\s*>"), "dangerous :> truncation", "critical"),
    DestructivePattern(re.compile(r"mv\s+.*/dev/null"), "moving file to /dev/null", "critical"),
    DestructivePattern(re.compile(r"^\s*dd\s+"), "dd command (direct disk writing)", "critical"),
)
