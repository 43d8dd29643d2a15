"""
ASGI adapter for Slack interactive messages (FastAPI/Starlette).
"""

from starlette.requests import Request
from starlette.responses import Response
from starlette.types import Receive, Scope, Send

from ..config import Dispatch, Environment, VerifierConfig, build_config
from ..handler import BufferedResponse, RequestHandler
from ..models import IncomingRequest


def _to_starlette(sink: BufferedResponse) -> Response:
    return Response(
        content=sink.body_bytes(),
        status_code=sink.status_code,
        headers=sink.headers,
    )


class InteractiveMessagesASGIApp:
    """
    ASGI app that verifies and dispatches Slack interactive requests.

    Args:
        config: Ready VerifierConfig. Alternatively pass signing_secret and dispatch.
        signing_secret: Slack app signing secret
        dispatch: Callback receiving each verified ParsedEvent
        environment: PRODUCTION (default) or DEVELOPMENT

    Example (Starlette):
        >>> from starlette.applications import Starlette
        >>> from starlette.routing import Route
        >>> from slack_interactive_messages import InteractiveMessagesASGIApp
        >>>
        >>> async def dispatch(event):
        ...     return {"status": 200, "content": {"text": "Thanks!"}}
        >>>
        >>> slack = InteractiveMessagesASGIApp(signing_secret="...", dispatch=dispatch)
        >>> app = Starlette(routes=[Route("/slack/actions", slack, methods=["POST"])])

    Example (FastAPI route):
        >>> @app.post("/slack/actions")
        >>> async def actions(request: Request):
        ...     return await slack.handle_request(request)
    """

    def __init__(
        self,
        config: VerifierConfig | None = None,
        *,
        signing_secret: str | None = None,
        dispatch: Dispatch | None = None,
        environment: Environment | None = None,
    ):
        self.config = build_config(config, signing_secret, dispatch, environment)
        self.handler = RequestHandler(self.config)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            raise RuntimeError(f"Unsupported ASGI scope type: {scope['type']}")

        request = Request(scope, receive)
        response = await self.handle_request(request)
        await response(scope, receive, send)

    async def handle_request(self, request: Request) -> Response:
        """Verify and dispatch a Starlette request, returning the response."""
        incoming = IncomingRequest(
            method=request.method,
            headers=dict(request.headers.items()),
            stream=request.stream(),
        )
        sink = BufferedResponse()
        await self.handler.handle(incoming, sink)
        return _to_starlette(sink)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(environment={self.config.environment.value!r})"