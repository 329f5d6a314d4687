# celery_worker.py
# celery -A celery_worker.celery worker --loglevel=info
import os
from dotenv import load_dotenv

load_dotenv()

from app import create_app  # noqa
from app.config import configs  # noqa


config_name = os.getenv("FLASK_CONFIG", "develop")
flask_app = create_app(configs[config_name])
celery = flask_app.extensions["celery"]
