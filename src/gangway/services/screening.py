"""アーティファクト内のコマンドをドライラン評価するサービス。"""

import logging
from collections.abc import Iterable
from typing import assert_never

from gangway.models.command import ActionReview
from gangway.models.output import (
    Action,
    Artifact,
    BuildAction,
    FileAction,
    Response,
    ShellAction,
    StartAction,
    SupabaseAction,
)
from gangway.safety.dry_run import DryRunValidator

logger = logging.getLogger(__name__)


def command_of(action: Action) -> str | None:
    """アクションが実行するシェルコマンドを返す。コマンドを持たない場合はNone。"""
    match action:
        case ShellAction() | StartAction() | BuildAction():
            return action.content
        case FileAction() | SupabaseAction():
            return None
        case _:
            assert_never(action)


class ScreeningService:
    """検証済みのArtifact/Responseに含まれるコマンドを評価する。

    判定結果は助言であり、実行の可否は呼び出し側が決める。
    """

    def __init__(self, validator: DryRunValidator | None = None) -> None:
        self._validator = validator or DryRunValidator()

    def review_artifact(self, artifact: Artifact) -> list[ActionReview]:
        """アーティファクト内のコマンド系アクションを実行順に評価する。

        Args:
            artifact: 検証済みのアーティファクト。

        Returns:
            shell / start / build アクションごとの評価結果。
        """
        reviews: list[ActionReview] = []
        for index, action in enumerate(artifact.actions):
            command = command_of(action)
            if command is None:
                continue
            reviews.append(
                ActionReview(
                    artifact_id=artifact.id,
                    index=index,
                    kind=action.kind,
                    report=self._validator.evaluate(command),
                )
            )
        return reviews

    def review_response(self, response: Response) -> list[ActionReview]:
        """レスポンス内の全アーティファクトを順に評価する。"""
        reviews: list[ActionReview] = []
        for artifact in response.artifacts or ():
            reviews.extend(self.review_artifact(artifact))
        return reviews

    @staticmethod
    def destructive_reviews(reviews: Iterable[ActionReview]) -> list[ActionReview]:
        """破壊的と判定された評価結果のみを返す。"""
        flagged = [r for r in reviews if r.report.is_destructive]
        if flagged:
            logger.info("%d destructive command(s) found", len(flagged))
        return flagged
