"""
FastAPI demo for Slack interactive messages.

Usage:
    # Install dependencies
    pip install -e ".[asgi,fastapi]"

    # Run the server
    uvicorn examples.fastapi_demo:app --port 8009

    # Point your Slack app's Interactivity Request URL at
    #   https://<your-tunnel>/slack/actions

Environment variables:
    SLACK_SIGNING_SECRET - Signing secret from the Slack app's Basic Information page
    SLACK_INTERACTIONS_ENV - Set to "development" to see error text in 500 responses
"""

import asyncio
import logging

from fastapi import FastAPI, Request

from slack_interactive_messages import (
    DispatchResult,
    HandlerError,
    InteractiveMessagesASGIApp,
    ParsedEvent,
    ResponseUrlClient,
    VerifierConfig,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("fastapi_demo")

response_urls = ResponseUrlClient()


async def follow_up(response_url: str, user: str) -> None:
    """Replace the original message once the slow work is done."""
    await asyncio.sleep(2)
    result = await response_urls.send(response_url, {
        "replace_original": True,
        "text": f"Approved by <@{user}>",
    })
    if not result.ok:
        logger.warning("Follow-up failed: %s", result.error)


async def dispatch(event: ParsedEvent) -> DispatchResult | None:
    """Route interactive payloads by type."""
    if event.type == "block_actions":
        user = event.body.get("user", {}).get("id", "someone")
        if event.response_url:
            asyncio.create_task(follow_up(event.response_url, user))
        return DispatchResult(status=200)

    if event.type == "view_submission":
        values = event.body.get("view", {}).get("state", {}).get("values", {})
        if not values:
            return DispatchResult(
                status=200,
                content={"response_action": "errors", "errors": {"input": "Required"}},
            )
        return DispatchResult(status=200, content={"response_action": "clear"})

    if event.type == "shortcut":
        raise HandlerError(f"No shortcut handler for {event.body.get('callback_id')}")

    # Unknown payload types are answered with 404
    return None


slack = InteractiveMessagesASGIApp(config=VerifierConfig.from_env(dispatch))

app = FastAPI(
    title="Slack Interactive Messages Demo",
    description="Verifies Slack signatures and dispatches interactive payloads",
    version="0.1.0",
)


@app.post("/slack/actions")
async def slack_actions(request: Request):
    """Interactivity Request URL."""
    return await slack.handle_request(request)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "environment": slack.config.environment.value}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8009)
