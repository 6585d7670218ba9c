"""ドライラン変換と評価。

生成するプレビューは常に ``echo <クォート済み文字列>`` の形をとり、
元コマンドのいかなる部分も実行位置に置かない。
"""

import re
import shlex

from gangway.models.command import Classification, DryRunReport
from gangway.safety.classifier import classify_command

_RM_RE = re.compile(r"^rm\s+")
# 動詞と先頭に連続するフラグ群（-rf, -r -f, --force, -- 等）
_RM_PREFIX_RE = re.compile(r"^rm\s+(?:-{1,2}[\w-]*\s*)*")
_COPY_MOVE_RE = re.compile(r"^(cp|mv)\s+")
# 最後のリダイレクト演算子までを除去
_REDIRECT_PREFIX_RE = re.compile(r"^.*>\s*", re.DOTALL)


def _preview(text: str) -> str:
    return f"echo {shlex.quote(text)}"


def make_dry_run_safe(command: str) -> str:
    """コマンドを副作用のないプレビューコマンドに変換する。

    判定は上から順に行い、最初に該当した規則を適用する。

    1. rm: 削除対象のみを表示
    2. cp / mv: コピー・移動であることと元のコマンド全体を表示
    3. リダイレクトを含む: 書き込み（切り詰め）対象ファイルを表示
    4. その他: 元のコマンドをそのまま表示
    """
    trimmed = command.strip()

    if _RM_RE.match(trimmed):
        target = _RM_PREFIX_RE.sub("", trimmed, count=1)
        return _preview(f"DRY RUN - Would delete: {target}")

    copy_move = _COPY_MOVE_RE.match(trimmed)
    if copy_move:
        verb = "copy" if copy_move.group(1) == "cp" else "move"
        return _preview(f"DRY RUN - Would {verb}: {trimmed}")

    if ">" in trimmed:
        target = _REDIRECT_PREFIX_RE.sub("", trimmed, count=1)
        return _preview(f"DRY RUN - Would truncate/write to file: {target}")

    return _preview(f"DRY RUN: {trimmed}")


class DryRunValidator:
    """判定とドライラン変換を組み合わせ、助言用のレポートを生成する。

    コマンドを実行することはない。ブロックするか警告に留めるかは呼び出し側が決める。
    """

    @staticmethod
    def build_warning(classification: Classification) -> str:
        severity = (classification.severity or "medium").upper()
        return f"DESTRUCTIVE OPERATION [{severity}]: {classification.reason}"

    def evaluate(self, command: str) -> DryRunReport:
        """コマンドをドライランとして評価する。

        Args:
            command: 評価対象のシェルコマンド。

        Returns:
            破壊的な場合は警告文と安全な代替コマンドを含むレポート。
        """
        classification = classify_command(command)
        if not classification.is_destructive:
            return DryRunReport(command=command, classification=classification)

        return DryRunReport(
            command=command,
            classification=classification,
            warning=self.build_warning(classification),
            dry_run_command=make_dry_run_safe(command),
        )


_VALIDATOR = DryRunValidator()


def evaluate_command(command: str) -> DryRunReport:
    """DryRunValidator.evaluate の関数版。"""
    return _VALIDATOR.evaluate(command)
