"""
游戏主程序入口
Fair Rock Paper Scissors Main Entry
"""
import sys
import argparse
from typing import List, Optional, Tuple

from .app import Application
from .utils.error_handler import USAGE, global_error_handler
from .utils.logger import setup_logger

logger = setup_logger("FairRPS.Main")

CONFIG_OPTION = '--config'


def build_parser() -> argparse.ArgumentParser:
    """只解析 --config；招式名称可以以 '-' 开头，不交给 argparse"""
    parser = argparse.ArgumentParser(prog='fairrps', add_help=False, allow_abbrev=False)
    parser.add_argument(
        CONFIG_OPTION,
        type=str,
        default=None,
        help='配置文件路径（默认: config/config.yaml）'
    )
    return parser


def split_arguments(argv: List[str]) -> Tuple[List[str], List[str]]:
    """
    把命令行拆成 (--config 相关参数, 招式列表)

    "--config PATH" 与 "--config=PATH" 可以出现在任意位置；
    "--" 之后的内容全部视为招式。

    Raises:
        ValueError: --config 缺少路径
    """
    options: List[str] = []
    moves: List[str] = []
    tokens = iter(argv)
    for token in tokens:
        if token == '--':
            moves.extend(tokens)
            break
        if token == CONFIG_OPTION:
            path = next(tokens, None)
            if path is None:
                raise ValueError(f"{CONFIG_OPTION} requires a path")
            options.extend([token, path])
        elif token.startswith(CONFIG_OPTION + '='):
            options.append(token)
        else:
            moves.append(token)
    return options, moves


def main(argv: Optional[List[str]] = None) -> int:
    """主函数，返回进程退出码"""
    if argv is None:
        argv = sys.argv[1:]

    try:
        options, moves = split_arguments(argv)
    except ValueError as e:
        print(f"Error: {e}")
        print(USAGE)
        return 1
    args = build_parser().parse_args(options)

    logger.info("游戏启动")
    app = Application(config_path=args.config)

    try:
        success = app.start(moves)
    except Exception as e:
        logger.error(f"程序异常退出: {e}", exc_info=True)
        global_error_handler.handle(e, "主程序")
        return 1
    finally:
        logger.info("程序退出")

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
