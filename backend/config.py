import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + os.path.join(os.getcwd(), 'ponggou.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Key prefix for the five persisted records (players, tables, queue, matches, settings)
    STORAGE_KEY_PREFIX = os.environ.get('STORAGE_KEY_PREFIX', 'pongGou_')
    # Clients hold the final score this long before showing the winner (ms). Display only.
    ROUND_ANNOUNCE_DELAY_MS = int(os.environ.get('ROUND_ANNOUNCE_DELAY_MS', '0'))
    # Comma separated list of allowed browser origins
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173')
