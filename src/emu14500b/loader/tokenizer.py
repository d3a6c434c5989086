# emu14500b/loader/tokenizer.py
"""
アセンブリテキストの分割と字句解析。
ソースを命令行に分割し、各行をニーモニックとオペランドに分解します。
"""
import re
from typing import List, Optional

from emu14500b.common.types import TokenizedLine

# 命令の区切り: セミコロンまたは改行
LINE_SEPARATORS = re.compile(r"[;\r\n]")


# @intent:responsibility アセンブリテキストを命令行のリストに分割します。空の行は除外します。
def split_source(source: str) -> List[str]:
    return [line.strip() for line in LINE_SEPARATORS.split(source) if line.strip()]


# @intent:responsibility 1行をニーモニックとオペランドに分解します。
# @intent:return 空行の場合はNone。
def tokenize_line(line: str) -> Optional[TokenizedLine]:
    line = line.strip()
    if not line:
        return None

    parts = re.split(r'\s+', line, maxsplit=1)
    mnemonic = parts[0].upper()
    operand = parts[1].strip() if len(parts) > 1 else None

    return TokenizedLine(mnemonic, operand)
