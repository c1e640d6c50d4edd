import logging
import os
from typing import Optional

from flask import Flask, request, jsonify, Response
from werkzeug.exceptions import MethodNotAllowed

from shared.pubsub import EventPublisher

from .config import config
from .entity_registry import EntityRegistry
from .errors import AppError, MethodNotSupported
from .metrics import RequestCounter
from .schemas import (
    GameCreateRequest,
    PlayerCreateRequest,
    parse_player_id,
    read_request_body,
)

logger = logging.getLogger(__name__)

# Resources served by the registry routes; only GET and POST are accepted on them
REGISTRY_RESOURCES = ('player', 'game')
ALLOWED_METHODS = ('GET', 'POST')


def registry_resource(path: str) -> Optional[str]:
    """Return 'player' or 'game' for paths under those resources."""
    for resource in REGISTRY_RESOURCES:
        if path == f'/{resource}' or path.startswith(f'/{resource}/'):
            return resource
    return None


def create_app(config_name: str = None, registry: Optional[EntityRegistry] = None) -> Flask:
    """Application factory for the registry service."""
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))

    if registry is None:
        publisher = None
        if app.config.get('REDIS_URL'):
            publisher = EventPublisher.from_url(
                app.config['REDIS_URL'],
                channel=app.config['EVENT_CHANNEL'],
                log_size=app.config['EVENT_LOG_SIZE']
            )
            logger.info(f"Publishing registry events to {app.config['EVENT_CHANNEL']}")
        registry = EntityRegistry(
            strict_game_players=app.config['STRICT_GAME_PLAYERS'],
            publisher=publisher
        )

    # Store services on app for access in routes
    app.registry = registry
    app.request_counter = RequestCounter()

    register_error_handlers(app)
    register_routes(app)
    register_ops_routes(app)

    return app


def text_response(body: str, status: int = 200) -> Response:
    return Response(body, status=status, mimetype='text/plain')


def register_error_handlers(app: Flask):
    """Convert errors into status codes with the message as a plain text body,
    and reject methods other than GET and POST on the registry routes."""

    @app.errorhandler(AppError)
    def handle_app_error(error: AppError):
        logger.warning(f"{request.method} {request.path} -> {error.code}: {error.message}")
        return text_response(error.message, error.code)

    @app.errorhandler(MethodNotAllowed)
    def handle_method_not_allowed(error: MethodNotAllowed):
        return handle_app_error(MethodNotSupported())

    @app.before_request
    def guard_registry_methods():
        resource = registry_resource(request.path)
        if resource is None:
            return
        app.request_counter.increment(resource)
        if request.method not in ALLOWED_METHODS:
            raise MethodNotSupported()


def register_routes(app: Flask):
    """Register player and game routes."""

    @app.route('/')
    def hello():
        return text_response('Hello World!')

    # ==================== Players ====================

    @app.route('/player/', methods=['GET'], provide_automatic_options=False)
    def list_players():
        logger.info("GET /player")
        players = app.registry.list_players()
        return jsonify([p.to_dict() for p in players])

    @app.route('/player/<path:player_id>', methods=['GET'], provide_automatic_options=False)
    def get_player(player_id: str):
        logger.info(f"GET /player/{player_id}")
        player = app.registry.get_player(parse_player_id(player_id))
        return jsonify(player.to_dict())

    @app.route('/player/', methods=['POST'], provide_automatic_options=False)
    def create_player():
        logger.info("POST /player")
        payload = PlayerCreateRequest.from_body(read_request_body(request))
        player_id = app.registry.create_player(payload.name)
        return jsonify(player_id)

    # ==================== Games ====================

    @app.route('/game/', methods=['GET'], provide_automatic_options=False)
    def list_games():
        logger.info("GET /game")
        games = app.registry.list_games()
        return jsonify([g.to_dict() for g in games])

    @app.route('/game/', methods=['POST'], provide_automatic_options=False)
    def create_game():
        logger.info("POST /game")
        payload = GameCreateRequest.from_body(read_request_body(request))
        game = app.registry.create_game(
            payload.home_player_ids,
            payload.away_player_ids,
            payload.time
        )
        return jsonify(game.to_dict())


def register_ops_routes(app: Flask):
    """Register health, metrics and event log routes."""

    @app.route('/health')
    def health_check():
        return jsonify({
            'status': 'healthy',
            'players': app.registry.player_count(),
            'games': app.registry.game_count()
        })

    @app.route('/metrics')
    def metrics():
        return jsonify(app.request_counter.snapshot())

    @app.route('/events')
    def recent_events():
        publisher = app.registry.publisher
        if publisher is None:
            return jsonify([])
        limit = request.args.get('limit', 50, type=int)
        return jsonify([e.to_dict() for e in publisher.get_recent_events(count=limit)])
