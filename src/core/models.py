"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Any

# Serialized GameState, as produced by GameState.to_dict()
StateDict = dict[str, Any]


@dataclass
class GameModel:
    """Transport-safe representation of a chess game used between API, Service, DB, and Engine layers."""

    state: StateDict
    move_count: int
    status: str
