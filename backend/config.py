import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///culers.sqlite'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Every allocation submission must add up to exactly this many points
    ALLOCATION_BUDGET = int(os.environ.get('ALLOCATION_BUDGET', '100'))
    LEADERBOARD_LIMIT = int(os.environ.get('LEADERBOARD_LIMIT', '100'))
    # Create tables and seed demo rows when the app starts
    AUTO_BOOTSTRAP = os.environ.get('AUTO_BOOTSTRAP', '1') not in ('0', 'false', 'False', '')
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000',
    ).split(',') if o.strip()]
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
