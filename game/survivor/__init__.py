"""Survivor - arcade survival arena: simulation core, session control and gym adapter"""

from .config import GameConfig, HazardPolicy, HunterPolicy
from .entities import SessionState
from .simulation import SimulationState, new_state, update
from .session import SessionController, Snapshot, JsonHighScoreStore, MemoryHighScoreStore
from .frame_driver import FrameDriver
from .survivor_env import SurvivorEnv, run_random_episode

__all__ = [
    'GameConfig', 'HazardPolicy', 'HunterPolicy', 'SessionState',
    'SimulationState', 'new_state', 'update',
    'SessionController', 'Snapshot', 'JsonHighScoreStore', 'MemoryHighScoreStore',
    'FrameDriver', 'SurvivorEnv', 'run_random_episode',
]
