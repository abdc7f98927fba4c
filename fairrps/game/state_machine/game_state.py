"""
回合状态枚举
Round State Enumeration
"""
from enum import Enum, auto


class RoundState(Enum):
    """单回合状态枚举"""
    INIT = auto()                  # 初始
    COMMITTED = auto()             # 已公布承诺
    AWAITING_HUMAN_MOVE = auto()   # 等待玩家出招
    RESOLVED = auto()              # 已结算
    REVEALED = auto()              # 已公开密钥（终态）
    ABORTED = auto()               # 已中止（终态）

    def __str__(self):
        return self.name

    @property
    def is_terminal(self) -> bool:
        return self in (RoundState.REVEALED, RoundState.ABORTED)
