import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "lifestory.settings")

app = Celery("lifestory")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
