from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver

_originals = {}

# -- request defaults

# The User-Agent header to send. When not set, "django-wfsclient/<version>" is used.
WFSCLIENT_USER_AGENT = getattr(settings, "WFSCLIENT_USER_AGENT", None)

# Timeout for each individual request (in seconds). Use None to wait forever.
WFSCLIENT_TIMEOUT = getattr(settings, "WFSCLIENT_TIMEOUT", 30)

# Extra query parameters to add to every request (e.g. a map key for the server).
WFSCLIENT_EXTRA_PARAMS = getattr(settings, "WFSCLIENT_EXTRA_PARAMS", {})

# -- connection pooling

# Maximum number of pooled connections per client instance.
WFSCLIENT_MAX_SOCKETS = getattr(settings, "WFSCLIENT_MAX_SOCKETS", 10)

# Whether connections are kept open between requests of the same client.
WFSCLIENT_KEEP_ALIVE = getattr(settings, "WFSCLIENT_KEEP_ALIVE", True)


@receiver(setting_changed)
def _on_settings_change(setting, value, enter, **kwargs):
    if not setting.startswith("WFSCLIENT_"):
        return

    conf_module = globals()
    if value is None and not enter:
        # override_settings().disable() returns what the django settings module had.
        # Revert to our defaults here instead.
        value = _originals.get(setting)
    else:
        # Track defaults of this file for reverting to them
        _originals.setdefault(setting, conf_module[setting])

    conf_module[setting] = value
