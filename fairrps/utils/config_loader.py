"""
配置加载工具模块
Configuration Loader Utility
"""
import copy
import hashlib
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from .exceptions import ConfigurationException
from .logger import setup_logger

logger = setup_logger("FairRPS.ConfigLoader")

MIN_KEY_BYTES = 32
# shake 系列输出长度可变，不能直接用于 HMAC
SUPPORTED_DIGESTS = frozenset(
    name for name in hashlib.algorithms_guaranteed if not name.startswith("shake")
)

DEFAULT_CONFIG: Dict[str, Any] = {
    'commitment': {
        'key_bytes': 32,
        'digest': 'sha256',
    },
    'logging': {
        'level': 'WARNING',
        'file': None,
    },
}


class ConfigLoader:
    """配置加载器类"""

    @staticmethod
    def default_config_path() -> Path:
        """默认配置文件路径：仓库根目录下的 config/config.yaml"""
        return Path(__file__).parent.parent.parent / "config" / "config.yaml"

    @staticmethod
    def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        从YAML文件加载配置，并与默认配置合并

        未指定路径且默认文件不存在时直接使用默认配置；
        显式指定的文件不存在则视为配置错误。

        Args:
            config_path: 配置文件路径

        Returns:
            Dict[str, Any]: 合并后的配置字典

        Raises:
            ConfigurationException: 文件不存在、YAML解析失败或取值非法
        """
        explicit = config_path is not None
        config_file = Path(config_path) if explicit else ConfigLoader.default_config_path()

        if not config_file.exists():
            if explicit:
                raise ConfigurationException(f"配置文件不存在: {config_path}")
            logger.debug(f"默认配置文件不存在，使用内置配置: {config_file}")
            return copy.deepcopy(DEFAULT_CONFIG)

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"YAML解析错误: {e}")
            raise ConfigurationException(f"YAML解析错误: {e}") from e

        if loaded is None:
            logger.warning(f"配置文件为空: {config_file}")
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigurationException(f"配置文件顶层必须是映射: {config_file}")

        config = ConfigLoader.merge_defaults(loaded)
        ConfigLoader.validate(config)
        logger.info(f"成功加载配置文件: {config_file}")
        return config

    @staticmethod
    def merge_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
        """
        按节合并默认配置，文件中的值优先

        已知节为空（YAML 中只写了节名）时沿用默认值。

        Raises:
            ConfigurationException: 已知节不是映射
        """
        merged = copy.deepcopy(DEFAULT_CONFIG)
        for section, values in config.items():
            if section not in merged:
                merged[section] = values
                continue
            if values is None:
                continue
            if not isinstance(values, dict):
                raise ConfigurationException(
                    f"配置节 {section} 必须是映射: {values!r}",
                    config_key=section
                )
            merged[section].update(values)
        return merged

    @staticmethod
    def validate(config: Dict[str, Any]):
        """
        校验承诺相关配置

        Raises:
            ConfigurationException: 取值非法
        """
        commitment = ConfigLoader.get_commitment_config(config)

        key_bytes = commitment.get('key_bytes')
        if not isinstance(key_bytes, int) or isinstance(key_bytes, bool) or key_bytes < MIN_KEY_BYTES:
            raise ConfigurationException(
                f"commitment.key_bytes 必须是不小于 {MIN_KEY_BYTES} 的整数: {key_bytes!r}",
                config_key='commitment.key_bytes'
            )

        digest = commitment.get('digest')
        if digest not in SUPPORTED_DIGESTS:
            raise ConfigurationException(
                f"不支持的摘要算法: {digest!r}",
                config_key='commitment.digest'
            )

    @staticmethod
    def save_config(config: Dict[str, Any], config_path: str) -> bool:
        """
        保存配置到YAML文件

        Args:
            config: 配置字典
            config_path: 配置文件路径

        Returns:
            bool: 保存是否成功
        """
        config_file = Path(config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(config_file, 'w', encoding='utf-8') as f:
                yaml.dump(config, f, default_flow_style=False,
                          allow_unicode=True, sort_keys=False)
        except OSError as e:
            logger.error(f"保存配置文件失败: {e}")
            return False

        logger.info(f"成功保存配置文件: {config_path}")
        return True

    @staticmethod
    def get_commitment_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """从配置中获取承诺（HMAC）配置"""
        return config.get('commitment', {})

    @staticmethod
    def get_logging_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """从配置中获取日志配置"""
        return config.get('logging', {})
