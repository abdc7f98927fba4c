"""
控制台界面
Console View - 所有面向玩家的输出与输入提示
"""
import sys
from typing import Callable, Optional, TextIO
from tabulate import tabulate
from .game import Commitment, GameResult, MoveSet, OutcomeTable, RoundReport

PROMPT = "Enter your move: "
HELP_HEADER = "v PC\\User >"

RESULT_TEXT = {
    GameResult.DRAW: "DRAW",
    GameResult.WIN: "YOU WIN!",
    GameResult.LOSE: "COMPUTER WIN!",
}


class ConsoleView:
    """控制台视图类"""

    def __init__(self,
                 output: Optional[TextIO] = None,
                 input_func: Optional[Callable[[str], str]] = None):
        """
        Args:
            output: 输出流，默认 sys.stdout
            input_func: 读取一行输入的函数（参数为提示文字）
        """
        self.output = output
        self.input_func = input_func or input

    def show(self, text: str = ""):
        print(text, file=self.output or sys.stdout)

    def show_commitment(self, commitment: Commitment):
        self.show(f"HMAC: {commitment}")

    def show_moves(self, moves: MoveSet):
        self.show("Available moves:")
        for number, move in enumerate(moves, start=1):
            self.show(f"{number} - {move}")
        self.show("0 - exit")
        self.show("? - help")

    def show_round_start(self, commitment: Commitment, moves: MoveSet):
        """公布承诺和招式列表（必须在读取玩家输入之前）"""
        self.show_commitment(commitment)
        self.show_moves(moves)

    def prompt_move(self) -> str:
        """阻塞读取玩家输入"""
        return self.input_func(PROMPT)

    def render_help_table(self, table: OutcomeTable) -> str:
        """
        生成帮助表：行为电脑招式，列为玩家招式，单元格为电脑视角的胜负

        Args:
            table: 胜负表

        Returns:
            str: 表格文本
        """
        headers = [HELP_HEADER] + list(table.moves)
        rows = [[move] + [str(result) for result in results] for move, results in table.rows()]
        return tabulate(rows, headers=headers, tablefmt="grid")

    def show_help_table(self, table: OutcomeTable):
        self.show("Results are from the computer's point of view (rows: PC move, columns: your move).")
        self.show(self.render_help_table(table))

    def show_result(self, report: RoundReport):
        self.show(f"Your move: {report.human_move}")
        self.show(f"Computer move: {report.computer_move}")
        self.show(RESULT_TEXT[report.result])
        self.show(f"HMAC key: {report.key_hex}")

    def show_report(self, report: RoundReport):
        """按回合结果输出：结算、帮助表或静默退出"""
        if report.revealed:
            self.show_result(report)
        elif report.table is not None:
            self.show_help_table(report.table)
