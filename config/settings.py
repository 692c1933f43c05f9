import os
from dotenv import load_dotenv

# Only load the .env file if we're not on Render (i.e., we are in a local environment)
if os.environ.get("RENDER") != "true":
    load_dotenv()

# Flask Configuration
SECRET_KEY = os.getenv('SECRET_KEY', 'a_very_secret_key_that_should_be_changed')
CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

# Socket.IO Configuration
ASYNC_MODE = os.getenv('ASYNC_MODE', 'threading')

# Lobby Configuration
DEFAULT_TARGET_SCORE = int(os.getenv('DEFAULT_TARGET_SCORE', 100))

# Logging Configuration
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# Server Configuration (Render provides PORT; fall back to 10000 like the Render default)
PORT = int(os.getenv('PORT', 10000))
HOST = os.getenv('HOST', '0.0.0.0')
DEBUG = os.environ.get('RENDER', '') != 'true'

# Render Configuration
IS_RENDER = os.environ.get("RENDER", "") == "true"


def as_dict():
    """Settings as a flat dictionary, suitable for Flask's config."""
    return {
        'SECRET_KEY': SECRET_KEY,
        'CORS_ORIGINS': CORS_ORIGINS,
        'ASYNC_MODE': ASYNC_MODE,
        'DEFAULT_TARGET_SCORE': DEFAULT_TARGET_SCORE,
        'LOG_LEVEL': LOG_LEVEL,
        'PORT': PORT,
        'HOST': HOST,
        'DEBUG': DEBUG,
        'IS_RENDER': IS_RENDER,
    }
