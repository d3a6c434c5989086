"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスなどを定義します。
"""
from typing import NamedTuple, Optional

# @intent:data_structure 字句解析済みの1行（ニーモニックと任意のオペランド）。
# Loader, Runner, Sessionなど複数のレイヤーで共通して使用されます。
class TokenizedLine(NamedTuple):
    mnemonic: str
    operand: Optional[str] = None
