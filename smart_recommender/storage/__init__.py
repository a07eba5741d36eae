"""
Storage layer — file-backed persistence for the interaction history.

Submodules:
  interaction_store — InteractionStore: best-effort JSON save/load
"""

from smart_recommender.storage.interaction_store import InteractionStore

__all__ = ["InteractionStore"]
