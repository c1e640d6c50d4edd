from enum import Enum
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List
import json


class EventType(str, Enum):
    PLAYER_CREATED = "player.created"
    GAME_CREATED = "game.created"


@dataclass
class Event:
    type: EventType
    timestamp: str = None
    data: dict = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"
        if self.data is None:
            self.data = {}

    def to_dict(self) -> dict:
        return {
            "type": self.type.value if isinstance(self.type, EventType) else self.type,
            "timestamp": self.timestamp,
            "data": self.data
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> "Event":
        return cls(
            type=EventType(data["type"]) if data["type"] in [e.value for e in EventType] else data["type"],
            timestamp=data.get("timestamp"),
            data=data.get("data", {})
        )

    @classmethod
    def from_json(cls, json_str: str) -> "Event":
        return cls.from_dict(json.loads(json_str))


def player_created_event(player_id: int, name: str) -> Event:
    return Event(
        type=EventType.PLAYER_CREATED,
        data={
            "player_id": player_id,
            "name": name
        }
    )


def game_created_event(game_index: int, home_player_ids: List[int], away_player_ids: List[int], time: str) -> Event:
    return Event(
        type=EventType.GAME_CREATED,
        data={
            "game_index": game_index,
            "home_player_ids": home_player_ids,
            "away_player_ids": away_player_ids,
            "time": time
        }
    )
