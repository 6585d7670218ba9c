"""Gangwayのカスタム例外クラス。"""

from gangway.models.validation import FieldError


class GangwayError(Exception):
    """Gangwayの基底例外クラス。"""


class SchemaValidationError(GangwayError):
    """LLM出力がAction/Artifact/Responseの構造に適合しない場合の例外。

    違反箇所は全件を ``errors`` に保持する。
    """

    def __init__(self, schema_name: str, errors: tuple[FieldError, ...]) -> None:
        details = "; ".join(f"{e.path}: {e.message}" for e in errors)
        super().__init__(f"Invalid {schema_name}: {details}")
        self.schema_name = schema_name
        self.errors = errors
