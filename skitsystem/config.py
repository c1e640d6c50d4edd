import os


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes')


class Config:
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '8080'))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Reject games that reference unknown players instead of
    # substituting an empty placeholder player
    STRICT_GAME_PLAYERS = _env_flag('STRICT_GAME_PLAYERS', 'true')

    # Redis (empty disables event publishing)
    REDIS_URL = os.getenv('REDIS_URL', '')
    EVENT_CHANNEL = os.getenv('EVENT_CHANNEL', 'registry:events')
    EVENT_LOG_SIZE = int(os.getenv('EVENT_LOG_SIZE', '1000'))


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    DEBUG = False
    REDIS_URL = ''
    STRICT_GAME_PLAYERS = True


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
