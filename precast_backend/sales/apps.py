# sales/apps.py

"""
SALES APP CONFIG

Commercial pipeline: order -> quote -> invoice -> payment, plus
sequential document numbering (CMD / DEV / FACT).
"""

from django.apps import AppConfig


class SalesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sales"
    verbose_name = "Sales"
