# supercart/celery_worker.py
from celery import Celery

from supercart.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "supercart",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# tasks have to be imported explicitly for the worker to register them
celery_app.conf.imports = (
    "supercart.services.popularity_service",
)

celery_app.conf.timezone = "UTC"
