"""
Settings modules for the precast backend.

Nothing is imported here; DJANGO_SETTINGS_MODULE picks one of
backend.settings.dev (local, tests) or backend.settings.prod (deployments).
"""
