"""
回合状态机
Round State Machine
"""
from typing import Optional, Callable, Dict, List
from .game_state import RoundState
from ...utils.logger import setup_logger

logger = setup_logger("FairRPS.RoundStateMachine")


class RoundStateMachine:
    """回合状态机类，每个回合只走一遍，不会自动重试"""

    # 状态转换规则
    VALID_TRANSITIONS: Dict[RoundState, List[RoundState]] = {
        RoundState.INIT: [RoundState.COMMITTED, RoundState.ABORTED],
        RoundState.COMMITTED: [RoundState.AWAITING_HUMAN_MOVE],
        RoundState.AWAITING_HUMAN_MOVE: [RoundState.RESOLVED, RoundState.ABORTED],
        RoundState.RESOLVED: [RoundState.REVEALED],
        RoundState.REVEALED: [],
        RoundState.ABORTED: [],
    }

    def __init__(self, initial_state: RoundState = RoundState.INIT):
        """
        初始化状态机

        Args:
            initial_state: 初始状态
        """
        self.current_state = initial_state
        self.previous_state: Optional[RoundState] = None
        self.state_handlers: Dict[RoundState, Callable] = {}
        self.transition_handlers: Dict[tuple, Callable] = {}

        logger.debug(f"回合状态机初始化，初始状态: {self.current_state}")

    def register_state_handler(self, state: RoundState, handler: Callable):
        """
        注册状态处理函数

        Args:
            state: 状态
            handler: 处理函数
        """
        self.state_handlers[state] = handler
        logger.debug(f"注册状态处理函数: {state}")

    def register_transition_handler(self, from_state: RoundState, to_state: RoundState,
                                    handler: Callable):
        """
        注册状态转换处理函数

        Args:
            from_state: 源状态
            to_state: 目标状态
            handler: 处理函数
        """
        key = (from_state, to_state)
        self.transition_handlers[key] = handler
        logger.debug(f"注册转换处理函数: {from_state} -> {to_state}")

    def transition_to(self, new_state: RoundState) -> bool:
        """
        转换到新状态

        处理函数抛出的异常直接向上传播，状态已经切换完成。

        Args:
            new_state: 新状态

        Returns:
            bool: 转换是否成功
        """
        if not self.can_transition_to(new_state):
            logger.warning(f"无效的状态转换: {self.current_state} -> {new_state}")
            return False

        old_state = self.current_state
        self.previous_state = old_state
        self.current_state = new_state

        logger.debug(f"状态转换: {old_state} -> {new_state}")

        transition_key = (old_state, new_state)
        if transition_key in self.transition_handlers:
            self.transition_handlers[transition_key]()

        if new_state in self.state_handlers:
            self.state_handlers[new_state]()

        return True

    def get_current_state(self) -> RoundState:
        """获取当前状态"""
        return self.current_state

    def get_previous_state(self) -> Optional[RoundState]:
        """获取上一个状态"""
        return self.previous_state

    def can_transition_to(self, state: RoundState) -> bool:
        """检查是否可以转换到指定状态"""
        return state in self.VALID_TRANSITIONS.get(self.current_state, [])

    def is_in_state(self, state: RoundState) -> bool:
        return self.current_state == state

    def is_finished(self) -> bool:
        """是否已进入终态"""
        return self.current_state.is_terminal
