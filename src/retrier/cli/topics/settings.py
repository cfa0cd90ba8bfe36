SETTINGS = """
TOPIC: settings
===============

Environment variables (prefix RETRIER_, .env files supported).

RETRY:
    RETRIER_RETRY_DELAY_UNIT=0.001    Seconds per delay unit

LOGGING:
    RETRIER_LOG_LEVEL=INFO            DEBUG, INFO, WARNING, ERROR, CRITICAL
    RETRIER_LOG_FORMAT=console        console, json, none
    RETRIER_LOG_COLORS=               true/false, unset = auto-detect

ACCESS:
    from retrier import get_settings, clear_settings_cache

    get_settings().retry.delay_unit
    clear_settings_cache()            Reload on next get_settings()
"""
