"""
回合控制器
Round Controller - 串联承诺方案与胜负规则

一回合的流程：电脑选招并公布 HMAC -> 等待玩家输入（唯一的阻塞点）
-> 结算胜负 -> 公开密钥。中止路径（退出、帮助、非法输入、随机源失败）
绝不公开密钥。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional
from .commitment import CommitmentScheme, Commitment, SecretKey
from .game_logic import MoveSet, GameResult, OutcomeTable, build_outcome_table, get_outcome
from .state_machine import RoundState, RoundStateMachine
from ..utils.exceptions import GameException, InputError, RandomnessFailure
from ..utils.logger import setup_logger

logger = setup_logger("FairRPS.RoundController")

EXIT_COMMAND = "0"
HELP_COMMAND = "?"


class SelectionKind(Enum):
    """玩家输入的类别"""
    EXIT = "exit"
    HELP = "help"
    MOVE = "move"


@dataclass(frozen=True)
class Selection:
    kind: SelectionKind
    move: Optional[str] = None


class AbortReason(Enum):
    """回合中止原因"""
    EXIT = "exit"
    HELP = "help"
    INVALID_INPUT = "invalid_input"
    RANDOMNESS_FAILURE = "randomness_failure"


@dataclass
class Round:
    """单回合数据，随控制器创建和销毁"""
    moves: MoveSet
    table: OutcomeTable
    computer_move: Optional[str] = None
    key: Optional[SecretKey] = None
    commitment: Optional[Commitment] = None
    human_move: Optional[str] = None
    result: Optional[GameResult] = None


@dataclass(frozen=True)
class RoundReport:
    """回合结束后交给界面层的结果"""
    state: RoundState
    abort_reason: Optional[AbortReason] = None
    human_move: Optional[str] = None
    computer_move: Optional[str] = None
    result: Optional[GameResult] = None
    key_hex: Optional[str] = None
    commitment: Optional[Commitment] = None
    table: Optional[OutcomeTable] = None

    @property
    def revealed(self) -> bool:
        return self.state == RoundState.REVEALED


def parse_selection(text: str, moves: MoveSet) -> Selection:
    """
    解析玩家输入

    接受 "0"（退出）、"?"（帮助）、1 基编号；纯数字一律按编号解释，
    其余文本必须与某个招式名称完全一致。

    Args:
        text: 玩家输入的一行
        moves: 招式集合

    Returns:
        Selection: 解析结果

    Raises:
        InputError: 无法识别或编号越界
    """
    choice = text.strip()

    if choice == EXIT_COMMAND:
        return Selection(SelectionKind.EXIT)
    if choice == HELP_COMMAND:
        return Selection(SelectionKind.HELP)

    if choice.isascii() and choice.isdigit():
        index = int(choice)
        if 1 <= index <= len(moves):
            return Selection(SelectionKind.MOVE, moves[index - 1])
        raise InputError(
            f"selection {choice} is out of range, choose 1-{len(moves)}, 0 or ?",
            raw_input=text
        )

    if choice in moves:
        return Selection(SelectionKind.MOVE, choice)

    raise InputError(
        f"{choice!r} is not a move number, move name, 0 or ?",
        raw_input=text
    )


class RoundController:
    """回合控制器类，持有本回合唯一的密钥与胜负表"""

    def __init__(self,
                 moves: MoveSet,
                 scheme: Optional[CommitmentScheme] = None,
                 rng=None):
        """
        初始化回合控制器

        Args:
            moves: 招式集合
            scheme: 承诺方案（默认 32 字节密钥 + sha256）
            rng: 电脑选招用的随机数生成器（默认系统安全随机源）
        """
        self.scheme = scheme or CommitmentScheme()
        self.rng = rng
        self.round = Round(moves=moves, table=build_outcome_table(moves))
        self.abort_reason: Optional[AbortReason] = None

        self.state_machine = RoundStateMachine(initial_state=RoundState.INIT)
        self._setup_state_handlers()

        self.on_state_changed: Optional[Callable] = None

    def _setup_state_handlers(self):
        """设置状态处理函数"""
        self.state_machine.register_state_handler(RoundState.ABORTED, self._handle_aborted)
        self.state_machine.register_state_handler(RoundState.REVEALED, self._handle_revealed)

    def _handle_aborted(self):
        logger.info(f"回合中止: {self.abort_reason.value if self.abort_reason else 'unknown'}")
        self.round.key = None

    def _handle_revealed(self):
        # 密钥只使用一次
        self.round.key = None

    def _transition(self, state: RoundState):
        if not self.state_machine.transition_to(state):
            raise GameException(
                f"invalid round transition to {state}",
                game_state=str(self.state_machine.get_current_state())
            )
        if self.on_state_changed:
            self.on_state_changed(state)

    def _require(self, state: RoundState):
        current = self.state_machine.get_current_state()
        if current != state:
            raise GameException(
                f"round is in state {current}, expected {state}",
                game_state=str(current)
            )

    def start(self) -> Commitment:
        """
        电脑选招并生成承诺（INIT -> COMMITTED -> AWAITING_HUMAN_MOVE）

        Returns:
            Commitment: 需要在玩家出招前公布的 HMAC

        Raises:
            RandomnessFailure: 随机源不可用，回合中止
            GameException: 回合已经开始过
        """
        self._require(RoundState.INIT)

        try:
            computer_move = self.scheme.choose_move(self.round.moves, self.rng)
            key = self.scheme.new_key()
        except RandomnessFailure:
            self.abort_reason = AbortReason.RANDOMNESS_FAILURE
            self._transition(RoundState.ABORTED)
            raise

        self.round.computer_move = computer_move
        self.round.key = key
        self.round.commitment = self.scheme.commit(key, computer_move)
        logger.info(f"电脑已承诺: HMAC={self.round.commitment}")

        self._transition(RoundState.COMMITTED)
        # 承诺公布后立即进入等待输入
        self._transition(RoundState.AWAITING_HUMAN_MOVE)
        return self.round.commitment

    def submit(self, text: str) -> RoundReport:
        """
        处理玩家输入并结束回合

        Args:
            text: 玩家输入的一行

        Returns:
            RoundReport: 退出/帮助时为 ABORTED，正常结算时为 REVEALED

        Raises:
            InputError: 输入非法，回合已中止且未公开密钥
        """
        self._require(RoundState.AWAITING_HUMAN_MOVE)

        try:
            selection = parse_selection(text, self.round.moves)
        except InputError:
            self._abort(AbortReason.INVALID_INPUT)
            raise

        if selection.kind == SelectionKind.EXIT:
            return self._abort(AbortReason.EXIT)
        if selection.kind == SelectionKind.HELP:
            return self._abort(AbortReason.HELP)

        return self._resolve(selection.move)

    def cancel(self) -> RoundReport:
        """外部退出信号（EOF、Ctrl-C），等同于输入 0"""
        self._require(RoundState.AWAITING_HUMAN_MOVE)
        return self._abort(AbortReason.EXIT)

    def run(self,
            read_line: Callable[[], str] = input,
            on_commit: Optional[Callable[[Commitment, MoveSet], None]] = None) -> RoundReport:
        """
        完整执行一回合：承诺 -> 公布 -> 阻塞读取一行 -> 结算 -> 公开

        Args:
            read_line: 读取玩家输入的函数
            on_commit: 承诺生成后、读取输入前调用，用于显示 HMAC 和招式列表

        Returns:
            RoundReport: 回合结果
        """
        commitment = self.start()
        if on_commit:
            on_commit(commitment, self.round.moves)

        try:
            text = read_line()
        except (EOFError, KeyboardInterrupt):
            logger.info("等待输入时收到退出信号")
            return self.cancel()

        return self.submit(text)

    def _resolve(self, human_move: str) -> RoundReport:
        self.round.human_move = human_move
        self.round.result = get_outcome(self.round.table, human_move, self.round.computer_move)
        self._transition(RoundState.RESOLVED)
        logger.info(f"结算: 玩家={human_move}, 电脑={self.round.computer_move}, 结果={self.round.result}")

        key_hex = self.scheme.reveal(self.round.key)
        self._transition(RoundState.REVEALED)

        return RoundReport(
            state=RoundState.REVEALED,
            human_move=human_move,
            computer_move=self.round.computer_move,
            result=self.round.result,
            key_hex=key_hex,
            commitment=self.round.commitment
        )

    def _abort(self, reason: AbortReason) -> RoundReport:
        self.abort_reason = reason
        self._transition(RoundState.ABORTED)
        return RoundReport(
            state=RoundState.ABORTED,
            abort_reason=reason,
            commitment=self.round.commitment,
            table=self.round.table if reason == AbortReason.HELP else None
        )

    def get_current_state(self) -> RoundState:
        """获取当前状态"""
        return self.state_machine.get_current_state()
