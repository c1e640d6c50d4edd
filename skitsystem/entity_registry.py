import logging
import threading
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from shared.events import player_created_event, game_created_event
from shared.pubsub import EventPublisher

from .errors import NotFoundError
from .models import Player, Game, GameResult, PLACEHOLDER_PLAYER, format_timestamp

logger = logging.getLogger(__name__)


class EntityRegistry:
    """
    In-memory registry of players and games:
    - Players keyed by a sequential id starting at 0
    - Games kept in creation order
    - One lock guards every read and write
    - Optional event publishing after each create
    """

    def __init__(self, strict_game_players: bool = True, publisher: Optional[EventPublisher] = None):
        self.strict_game_players = strict_game_players
        self.publisher = publisher
        self._lock = threading.Lock()
        self._players: Dict[int, Player] = {}
        self._games: List[Game] = []
        self._next_player_id = 0

    def create_player(self, name: str) -> int:
        """Store a new player and return its id."""
        with self._lock:
            player_id = self._next_player_id
            self._players[player_id] = Player(id=player_id, name=name)
            self._next_player_id += 1

        logger.info(f"Created player {player_id} ({name!r})")
        if self.publisher:
            self.publisher.publish(player_created_event(player_id, name))
        return player_id

    def get_player(self, player_id: int) -> Player:
        with self._lock:
            player = self._players.get(player_id)

        if player is None:
            raise NotFoundError(f"No player exists with id: {player_id}")
        logger.debug(f"Player found: {player}")
        return player

    def list_players(self) -> List[Player]:
        """All players. Callers must not depend on the order."""
        with self._lock:
            return list(self._players.values())

    def create_game(
        self,
        home_player_ids: Sequence[int],
        away_player_ids: Sequence[int],
        time: datetime
    ) -> Game:
        """
        Create a game from player ids.

        In strict mode any unknown id raises NotFoundError and nothing is
        stored. Otherwise unknown ids resolve to an empty placeholder player.
        """
        with self._lock:
            home_players = [self._resolve_player(pid) for pid in home_player_ids]
            away_players = [self._resolve_player(pid) for pid in away_player_ids]

            game = Game(
                home_players=home_players,
                away_players=away_players,
                time=time,
                result=GameResult()
            )
            self._games.append(game)
            game_index = len(self._games) - 1

        logger.info(
            f"Created game {game_index}: home={game.home_player_ids} "
            f"away={game.away_player_ids} at {format_timestamp(time)}"
        )
        if self.publisher:
            self.publisher.publish(game_created_event(
                game_index,
                list(home_player_ids),
                list(away_player_ids),
                format_timestamp(time)
            ))
        return game

    def list_games(self) -> List[Game]:
        """All games in creation order."""
        with self._lock:
            return list(self._games)

    def player_count(self) -> int:
        with self._lock:
            return len(self._players)

    def game_count(self) -> int:
        with self._lock:
            return len(self._games)

    def _resolve_player(self, player_id: int) -> Player:
        # Caller holds the lock
        player = self._players.get(player_id)
        if player is not None:
            return player
        if self.strict_game_players:
            raise NotFoundError(f"No player exists with id: {player_id}")
        logger.warning(f"Unknown player id {player_id} in game, using placeholder")
        return PLACEHOLDER_PLAYER
