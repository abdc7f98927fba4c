"""
错误处理工具模块
Error Handler Utility Module
"""
import traceback
from typing import Optional, Callable
from .exceptions import (
    GameException, ArgumentError, InputError, RandomnessFailure, ConfigurationException
)
from .logger import setup_logger

logger = setup_logger("FairRPS.ErrorHandler")

USAGE = "Usage: fairrps [--config PATH] MOVE1 MOVE2 MOVE3 [MOVE ...]  (odd count >= 3, unique)"


class ErrorHandler:
    """错误处理器类：记录日志并把面向用户的信息交给 notify 输出"""

    def __init__(self, notify: Callable[[str], None] = print):
        """
        初始化错误处理器

        Args:
            notify: 向用户输出信息的函数
        """
        self.notify = notify
        self.error_callbacks: dict = {}
        self.setup_default_handlers()

    def setup_default_handlers(self):
        """设置默认错误处理函数"""
        self.error_callbacks[ArgumentError] = self._handle_argument_error
        self.error_callbacks[InputError] = self._handle_input_error
        self.error_callbacks[RandomnessFailure] = self._handle_randomness_failure
        self.error_callbacks[GameException] = self._handle_game_error
        self.error_callbacks[ConfigurationException] = self._handle_config_error

    def register_handler(self, exception_type: type, handler: Callable):
        """
        注册错误处理函数

        Args:
            exception_type: 异常类型
            handler: 处理函数，签名为 (exception, context)
        """
        self.error_callbacks[exception_type] = handler
        logger.debug(f"注册错误处理函数: {exception_type.__name__}")

    def handle(self, exception: Exception, context: Optional[str] = None) -> bool:
        """
        处理异常

        Args:
            exception: 异常对象
            context: 上下文信息

        Returns:
            bool: 是否有对应的处理函数
        """
        exception_type = type(exception)

        error_msg = "异常发生"
        if context:
            error_msg += f" (上下文: {context})"
        error_msg += f": {exception}"
        logger.debug(error_msg)

        # 按 MRO 查找处理函数，最具体的类型优先
        handler = None
        for exc_type in exception_type.__mro__:
            if exc_type in self.error_callbacks:
                handler = self.error_callbacks[exc_type]
                break

        if handler is None:
            self._handle_generic_error(exception, context)
            return False

        handler(exception, context)
        return True

    def _handle_argument_error(self, exception: ArgumentError, context: Optional[str]):
        """处理参数错误"""
        logger.warning(f"参数错误 [{exception.kind}]: {exception.message}")
        self.notify(f"Error: {exception.message}")
        self.notify(USAGE)

    def _handle_input_error(self, exception: InputError, context: Optional[str]):
        """处理输入错误"""
        logger.warning(f"输入错误 [输入: {exception.raw_input!r}]: {exception.message}")
        self.notify(f"Invalid input: {exception.message}")

    def _handle_randomness_failure(self, exception: RandomnessFailure, context: Optional[str]):
        """处理随机源失败（致命）"""
        logger.critical(f"安全随机源失败: {exception.message}")
        self.notify(f"Fatal: {exception.message}")

    def _handle_game_error(self, exception: GameException, context: Optional[str]):
        """处理游戏逻辑错误"""
        logger.error(f"游戏逻辑错误 [状态: {exception.game_state}]: {exception.message}")
        self.notify(f"Error: {exception.message}")

    def _handle_config_error(self, exception: ConfigurationException, context: Optional[str]):
        """处理配置错误"""
        logger.error(f"配置错误 [键: {exception.config_key}]: {exception.message}")
        self.notify(f"Configuration error: {exception.message}")

    def _handle_generic_error(self, exception: Exception, context: Optional[str]):
        """处理通用错误"""
        logger.error(f"未处理的异常: {type(exception).__name__}: {exception}")
        logger.debug(traceback.format_exc())


# 全局错误处理器实例
global_error_handler = ErrorHandler()
