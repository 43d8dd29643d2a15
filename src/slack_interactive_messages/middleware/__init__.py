"""
Framework adapters for Slack interactive messages.

Re-exports adapter classes for convenient imports:
    from slack_interactive_messages.middleware import InteractiveMessagesASGIApp
    from slack_interactive_messages.middleware import InteractiveMessagesWSGIApp
"""

from .wsgi import InteractiveMessagesWSGIApp

__all__: list[str] = ["InteractiveMessagesWSGIApp"]

# ASGI adapter (FastAPI, Starlette)
try:
    from .asgi import InteractiveMessagesASGIApp
    __all__.append("InteractiveMessagesASGIApp")
except ImportError:
    pass
