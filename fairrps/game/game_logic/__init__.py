"""
游戏逻辑模块
Game Logic Module
"""
from .move_set import MoveSet
from .game_rules import GameResult, OutcomeTable, build_outcome_table, get_outcome

__all__ = [
    'MoveSet',
    'GameResult',
    'OutcomeTable',
    'build_outcome_table',
    'get_outcome'
]
