"""
游戏逻辑模块
Game Logic Module
"""
from .round_controller import (
    RoundController, Round, RoundReport, AbortReason, Selection, SelectionKind, parse_selection
)
from .game_logic import MoveSet, GameResult, OutcomeTable, build_outcome_table, get_outcome
from .commitment import SecretKey, Commitment, CommitmentScheme, verify_commitment
from .state_machine import RoundState, RoundStateMachine

__all__ = [
    'RoundController',
    'Round',
    'RoundReport',
    'AbortReason',
    'Selection',
    'SelectionKind',
    'parse_selection',
    'MoveSet',
    'GameResult',
    'OutcomeTable',
    'build_outcome_table',
    'get_outcome',
    'SecretKey',
    'Commitment',
    'CommitmentScheme',
    'verify_commitment',
    'RoundState',
    'RoundStateMachine'
]
