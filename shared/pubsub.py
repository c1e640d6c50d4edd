import logging
from typing import List

import redis

from .events import Event

logger = logging.getLogger(__name__)


class EventPublisher:
    """
    Publishes registry events over Redis pub/sub and keeps a capped
    event log list next to the channel.
    """

    def __init__(self, redis_client: redis.Redis, channel: str = "registry:events", log_size: int = 1000):
        self.redis = redis_client
        self.channel = channel
        self.log_key = f"{channel}:log"
        self.log_size = log_size

    @classmethod
    def from_url(cls, redis_url: str, **kwargs) -> "EventPublisher":
        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5
        )
        return cls(client, **kwargs)

    def publish(self, event: Event) -> bool:
        """Publish an event; failures are logged and reported as False."""
        payload = event.to_json()
        try:
            self.redis.publish(self.channel, payload)
            self.redis.lpush(self.log_key, payload)
            self.redis.ltrim(self.log_key, 0, self.log_size - 1)
        except redis.exceptions.RedisError as e:
            logger.error(f"Failed to publish {event.type} to {self.channel}: {e}")
            return False

        logger.debug(f"Published {event.type} to {self.channel}")
        return True

    def get_recent_events(self, count: int = 50) -> List[Event]:
        events_json = self.redis.lrange(self.log_key, 0, count - 1)
        return [Event.from_json(e) for e in events_json]
