"""
回合状态机模块
Round State Machine Module
"""
from .game_state import RoundState
from .game_state_machine import RoundStateMachine

__all__ = ['RoundState', 'RoundStateMachine']
