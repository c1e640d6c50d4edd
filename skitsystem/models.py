from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

# Timestamp of a game posted without a time
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO-8601, using 'Z' for UTC."""
    text = value.isoformat()
    if text.endswith('+00:00'):
        text = text[:-len('+00:00')] + 'Z'
    return text


@dataclass(frozen=True)
class Player:
    id: int = 0
    name: str = ''

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
        }


# Stands in for an unknown player id when strict validation is off
PLACEHOLDER_PLAYER = Player()


@dataclass(frozen=True)
class GameResult:
    home_goals: int = 0
    away_goals: int = 0

    def to_dict(self) -> dict:
        return {
            'homeGoals': self.home_goals,
            'awayGoals': self.away_goals,
        }


@dataclass(frozen=True)
class Game:
    home_players: List[Player]
    away_players: List[Player]
    time: datetime
    result: GameResult = field(default_factory=GameResult)

    @property
    def home_player_ids(self) -> List[int]:
        return [p.id for p in self.home_players]

    @property
    def away_player_ids(self) -> List[int]:
        return [p.id for p in self.away_players]

    def to_dict(self) -> dict:
        return {
            'homePlayers': [p.to_dict() for p in self.home_players],
            'awayPlayers': [p.to_dict() for p in self.away_players],
            'time': format_timestamp(self.time),
            'result': self.result.to_dict(),
        }
