"""
应用程序主类
Application Main Class
"""
from typing import List, Optional
from .console import ConsoleView
from .game import CommitmentScheme, MoveSet, RoundController, RoundReport
from .utils.config_loader import ConfigLoader
from .utils.error_handler import ErrorHandler
from .utils.exceptions import ArgumentError, ConfigurationException, GameException
from .utils.logger import setup_logger, setup_logger_from_config

logger = setup_logger("FairRPS.App")


class Application:
    """应用程序主类：加载配置，校验招式，执行一回合"""

    def __init__(self,
                 config_path: Optional[str] = None,
                 view: Optional[ConsoleView] = None,
                 rng=None):
        """
        初始化应用程序

        Args:
            config_path: 配置文件路径（默认 config/config.yaml，不存在则用内置配置）
            view: 控制台视图
            rng: 电脑选招用的随机数生成器
        """
        self.config_path = config_path
        self.config: dict = {}
        self.view = view or ConsoleView()
        self.rng = rng
        self.error_handler = ErrorHandler(notify=self.view.show)

        self.scheme: Optional[CommitmentScheme] = None
        self.controller: Optional[RoundController] = None
        self.last_report: Optional[RoundReport] = None

    def initialize(self) -> bool:
        """
        加载配置并配置日志

        Returns:
            bool: 初始化是否成功
        """
        try:
            self.config = ConfigLoader.load_config(self.config_path)
            setup_logger_from_config(ConfigLoader.get_logging_config(self.config))
            self.scheme = CommitmentScheme.from_config(ConfigLoader.get_commitment_config(self.config))
        except ConfigurationException as e:
            self.error_handler.handle(e, "加载配置")
            return False

        logger.info("应用程序初始化完成")
        return True

    def play(self, moves: List[str]) -> bool:
        """
        执行一回合

        Args:
            moves: 命令行给出的招式名称

        Returns:
            bool: 回合是否正常结束（结算、主动退出、查看帮助均视为正常）
        """
        try:
            move_set = MoveSet(moves)
        except ArgumentError as e:
            self.error_handler.handle(e, "校验参数")
            return False

        self.controller = RoundController(move_set, scheme=self.scheme, rng=self.rng)

        try:
            report = self.controller.run(
                read_line=self.view.prompt_move,
                on_commit=self.view.show_round_start
            )
        except GameException as e:
            # InputError / RandomnessFailure 均为终止性错误，密钥不会公开
            self.error_handler.handle(e, "回合进行中")
            return False

        self.last_report = report
        self.view.show_report(report)
        return True

    def start(self, moves: List[str]) -> bool:
        """
        启动应用程序

        Returns:
            bool: 是否成功
        """
        if not self.initialize():
            logger.error("应用程序启动失败")
            return False
        return self.play(moves)
