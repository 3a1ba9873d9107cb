import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Rooms untouched for this long are deleted (seconds)
    ROOM_IDLE_TIMEOUT_SEC = int(os.environ.get('ROOM_IDLE_TIMEOUT_SEC', '1800'))
    # How often the idle sweeper wakes up (seconds)
    IDLE_SWEEP_INTERVAL_SEC = int(os.environ.get('IDLE_SWEEP_INTERVAL_SEC', '30'))
    MIN_BOARD_SIZE = int(os.environ.get('MIN_BOARD_SIZE', '2'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
