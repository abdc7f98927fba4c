"""
HMAC 承诺方案
HMAC Commitment Scheme

电脑先选定招式并用一次性随机密钥计算 HMAC 公布给玩家，
玩家出招并结算后再公开密钥，玩家可独立重算 HMAC 验证电脑没有改招。
"""
import hmac
import secrets
from dataclasses import dataclass
from typing import Sequence
from ...utils.exceptions import RandomnessFailure, ConfigurationException
from ...utils.config_loader import MIN_KEY_BYTES, SUPPORTED_DIGESTS
from ...utils.logger import setup_logger

logger = setup_logger("FairRPS.Commitment")


@dataclass(frozen=True)
class SecretKey:
    """一次性 HMAC 密钥"""
    material: bytes

    def hex(self) -> str:
        return self.material.hex()

    def __repr__(self) -> str:
        # 公开前不得出现在日志或异常信息中
        return f"SecretKey(<{len(self.material)} bytes>)"


@dataclass(frozen=True)
class Commitment:
    """已公布的承诺值"""
    digest: str
    algorithm: str = 'sha256'

    def __str__(self) -> str:
        return self.digest


class CommitmentScheme:
    """承诺方案：生成密钥、选择招式、计算承诺、公开与验证"""

    def __init__(self, key_bytes: int = 32, digest: str = 'sha256'):
        """
        Args:
            key_bytes: 密钥字节数，至少 32（256 位）
            digest: hashlib 摘要算法名

        Raises:
            ConfigurationException: 参数非法
        """
        if key_bytes < MIN_KEY_BYTES:
            raise ConfigurationException(
                f"key_bytes must be at least {MIN_KEY_BYTES}, got {key_bytes}",
                config_key='commitment.key_bytes'
            )
        if digest not in SUPPORTED_DIGESTS:
            raise ConfigurationException(
                f"unsupported digest: {digest}",
                config_key='commitment.digest'
            )
        self.key_bytes = key_bytes
        self.digest = digest

    @classmethod
    def from_config(cls, commitment_config: dict) -> "CommitmentScheme":
        """从 commitment 配置节创建"""
        return cls(
            key_bytes=commitment_config.get('key_bytes', 32),
            digest=commitment_config.get('digest', 'sha256')
        )

    def new_key(self) -> SecretKey:
        """
        生成新的随机密钥

        Raises:
            RandomnessFailure: 系统安全随机源不可用
        """
        try:
            material = secrets.token_bytes(self.key_bytes)
        except (OSError, NotImplementedError) as e:
            raise RandomnessFailure(f"secure random source unavailable: {e}") from e

        if len(material) != self.key_bytes:
            raise RandomnessFailure(
                f"secure random source returned {len(material)} bytes, expected {self.key_bytes}"
            )
        return SecretKey(material)

    @staticmethod
    def choose_move(moves: Sequence[str], rng=None) -> str:
        """
        均匀随机选择电脑招式

        Args:
            moves: 招式序列
            rng: 提供 choice() 的随机数生成器，默认使用系统安全随机源

        Returns:
            str: 选中的招式
        """
        if rng is None:
            rng = secrets.SystemRandom()
        try:
            return rng.choice(list(moves))
        except (OSError, NotImplementedError) as e:
            raise RandomnessFailure(f"secure random source unavailable: {e}") from e

    def commit(self, key: SecretKey, move: str) -> Commitment:
        """计算 HMAC(key, move)，招式以 UTF-8 原样编码"""
        mac = hmac.new(key.material, move.encode('utf-8'), self.digest)
        return Commitment(mac.hexdigest(), self.digest)

    @staticmethod
    def reveal(key: SecretKey) -> str:
        """以十六进制公开密钥"""
        return key.hex()

    def verify(self, commitment: str, key_hex: str, move: str) -> bool:
        """
        用公开的密钥和招式重算 HMAC 并与承诺比较

        Args:
            commitment: 此前公布的 HMAC 十六进制串
            key_hex: 公开的密钥十六进制串
            move: 电脑公开的招式

        Returns:
            bool: 是否匹配；十六进制格式非法时返回 False
        """
        return verify_commitment(commitment, key_hex, move, self.digest)


def verify_commitment(commitment: str, key_hex: str, move: str, digest: str = 'sha256') -> bool:
    """不依赖密钥长度配置的独立验证入口，供 fairrps-verify 使用"""
    if digest not in SUPPORTED_DIGESTS:
        raise ConfigurationException(f"unsupported digest: {digest}", config_key='commitment.digest')
    try:
        key = bytes.fromhex(key_hex.strip())
    except ValueError:
        logger.info("密钥不是合法的十六进制串")
        return False

    expected = hmac.new(key, move.encode('utf-8'), digest).hexdigest()
    candidate = commitment.strip().lower()
    if not candidate.isascii():
        return False
    return hmac.compare_digest(expected, candidate)
