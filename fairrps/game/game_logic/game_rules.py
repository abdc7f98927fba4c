"""
游戏规则实现
Game Rules Implementation

任意奇数个招式的循环克制规则：招式按给定顺序编号 0..N-1，
对 i != j 令 d = (i - j) mod N，若 1 <= d <= (N-1)/2 则 i 胜 j，否则 j 胜 i。
N=3 时即为石头剪刀布（顺序 Rock, Paper, Scissors），
N=5 时即为 Rock, Spock, Paper, Lizard, Scissors。
"""
from enum import Enum
from typing import Iterable, List, Tuple, Union
import numpy as np
from .move_set import MoveSet
from ...utils.exceptions import InputError
from ...utils.logger import setup_logger

logger = setup_logger("FairRPS.GameRules")


class GameResult(Enum):
    """游戏结果枚举（以第一个招式的视角）"""
    WIN = "Win"
    LOSE = "Lose"
    DRAW = "Draw"

    def __str__(self):
        return self.value


# 矩阵编码
_CODES = {1: GameResult.WIN, -1: GameResult.LOSE, 0: GameResult.DRAW}


class OutcomeTable:
    """N x N 胜负表，matrix[i, j] 为招式 i 对招式 j 的结果编码"""

    def __init__(self, moves: MoveSet, matrix: np.ndarray):
        self.moves = moves
        self.matrix = matrix
        self.matrix.setflags(write=False)

    def outcome(self, a: str, b: str) -> GameResult:
        """
        查询 a 对 b 的结果

        Raises:
            InputError: 招式不在集合中
        """
        return _CODES[int(self.matrix[self._index(a), self._index(b)])]

    def beats(self, move: str) -> List[str]:
        """被 move 战胜的招式"""
        row = self.matrix[self._index(move)]
        return [self.moves[j] for j in np.flatnonzero(row == 1)]

    def loses_to(self, move: str) -> List[str]:
        """能战胜 move 的招式"""
        row = self.matrix[self._index(move)]
        return [self.moves[j] for j in np.flatnonzero(row == -1)]

    def rows(self) -> List[Tuple[str, List[GameResult]]]:
        """按行返回 (招式, 该招式对每个招式的结果)"""
        return [
            (move, [_CODES[int(code)] for code in self.matrix[i]])
            for i, move in enumerate(self.moves)
        ]

    def _index(self, move: str) -> int:
        try:
            return self.moves.index_of(move)
        except ValueError:
            raise InputError(f"unknown move: {move}", raw_input=move) from None

    def __len__(self) -> int:
        return len(self.moves)


def build_outcome_table(moves: Union[MoveSet, Iterable[str]]) -> OutcomeTable:
    """
    根据循环距离规则生成完整胜负表

    Args:
        moves: 招式集合或招式名称序列

    Returns:
        OutcomeTable: 胜负表

    Raises:
        ArgumentError: 招式集合非法
    """
    if not isinstance(moves, MoveSet):
        moves = MoveSet(moves)

    n = len(moves)
    half = (n - 1) // 2
    index = np.arange(n)
    distance = (index[:, None] - index[None, :]) % n

    matrix = np.where(distance == 0, 0, np.where(distance <= half, 1, -1)).astype(np.int8)

    logger.debug(f"生成胜负表: {n} 个招式，每个招式克制 {half} 个")
    return OutcomeTable(moves, matrix)


def get_outcome(table: OutcomeTable, a: str, b: str) -> GameResult:
    """
    判断 a 对 b 的结果，相同招式恒为平局（先于查表）

    Args:
        table: 胜负表
        a: 第一个招式
        b: 第二个招式

    Returns:
        GameResult: a 视角的结果
    """
    if a == b:
        return GameResult.DRAW
    return table.outcome(a, b)
