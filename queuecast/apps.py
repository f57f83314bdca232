from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class QueuecastConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "queuecast"
    verbose_name = _("Queue Wait Estimation")
