"""
招式集合
Move Set
"""
from typing import Iterable, Iterator, Tuple
from ...utils.exceptions import ArgumentError


class MoveSet:
    """有序、不可变、无重复的招式集合，长度为不小于3的奇数"""

    __slots__ = ('_moves',)

    def __init__(self, moves: Iterable[str]):
        """
        创建招式集合并校验

        Args:
            moves: 招式名称序列（区分大小写）

        Raises:
            ArgumentError: 数量不足、偶数个、存在空名称或重复
        """
        moves = tuple(moves)

        if len(moves) < 3:
            raise ArgumentError(
                f"at least 3 moves are required, got {len(moves)}",
                kind=ArgumentError.TOO_FEW
            )
        if len(moves) % 2 == 0:
            raise ArgumentError(
                f"the number of moves must be odd, got {len(moves)}",
                kind=ArgumentError.EVEN_COUNT
            )
        if any(not move.strip() for move in moves):
            raise ArgumentError(
                "move names must not be blank",
                kind=ArgumentError.BLANK_NAME
            )

        seen = set()
        duplicates = []
        for move in moves:
            if move in seen and move not in duplicates:
                duplicates.append(move)
            seen.add(move)
        if duplicates:
            raise ArgumentError(
                f"all moves must be unique, repeated: {', '.join(duplicates)}",
                kind=ArgumentError.DUPLICATES
            )

        object.__setattr__(self, '_moves', moves)

    def __setattr__(self, name, value):
        raise AttributeError("MoveSet is immutable")

    @property
    def moves(self) -> Tuple[str, ...]:
        return self._moves

    def index_of(self, move: str) -> int:
        """返回招式的 0 基下标，不存在时抛出 ValueError"""
        return self._moves.index(move)

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self) -> Iterator[str]:
        return iter(self._moves)

    def __getitem__(self, index: int) -> str:
        return self._moves[index]

    def __contains__(self, move) -> bool:
        return move in self._moves

    def __eq__(self, other) -> bool:
        if not isinstance(other, MoveSet):
            return NotImplemented
        return self._moves == other._moves

    def __hash__(self) -> int:
        return hash(self._moves)

    def __repr__(self) -> str:
        return f"MoveSet({list(self._moves)!r})"
