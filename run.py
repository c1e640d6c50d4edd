#!/usr/bin/env python3
"""
Entry point for the player/game registry service.

Usage:
    python run.py

Environment Variables:
    FLASK_ENV: development, production or testing (default: development)
    HOST: Interface to bind (default: 0.0.0.0)
    PORT: Port to run on (default: 8080)
    LOG_LEVEL: Logging level (default: DEBUG in development, INFO otherwise)
    STRICT_GAME_PLAYERS: Reject games with unknown player ids (default: true)
    REDIS_URL: Publish registry events to this Redis (default: disabled)
"""
import logging

from skitsystem.app import create_app


def main():
    app = create_app()

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
    logger = logging.getLogger('skitsystem')

    host = app.config['HOST']
    port = app.config['PORT']
    logger.info(f"Listening on {host}:{port}")
    app.run(host=host, port=port, debug=app.config.get('DEBUG', False), threaded=True)


if __name__ == '__main__':
    main()
