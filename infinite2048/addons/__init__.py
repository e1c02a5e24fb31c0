# -*- coding: utf-8 -*-
"""
Configuration and shared types of the game.
"""
from .config import GameConfig
from .types import Direction, GameMode, HistorySnapshot, RenderFrame, Transitioning

__all__ = ["GameConfig", "Direction", "GameMode", "HistorySnapshot", "RenderFrame", "Transitioning"]
