"""
自定义异常类
Custom Exception Classes
"""
from typing import Optional


class GameException(Exception):
    """游戏逻辑异常"""
    def __init__(self, message: str, game_state: Optional[str] = None):
        super().__init__(message)
        self.game_state = game_state
        self.message = message


class ArgumentError(GameException):
    """命令行招式参数错误（数量不足、偶数个、重复、空名称）"""
    TOO_FEW = "too_few"
    EVEN_COUNT = "even_count"
    DUPLICATES = "duplicates"
    BLANK_NAME = "blank_name"

    def __init__(self, message: str, kind: str):
        super().__init__(message)
        self.kind = kind


class InputError(GameException):
    """玩家输入无法解析或越界"""
    def __init__(self, message: str, raw_input: Optional[str] = None):
        super().__init__(message, game_state="ABORTED")
        self.raw_input = raw_input


class RandomnessFailure(GameException):
    """安全随机源不可用，无法生成可信的承诺"""
    def __init__(self, message: str):
        super().__init__(message, game_state="ABORTED")


class ConfigurationException(Exception):
    """配置异常"""
    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message)
        self.config_key = config_key
        self.message = message
