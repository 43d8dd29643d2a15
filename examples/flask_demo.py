"""
Flask demo for Slack interactive messages.

Usage:
    # Install dependencies
    pip install -e ".[flask]"

    # Run the server
    flask --app examples.flask_demo run --port 8010

    # Or directly
    python examples/flask_demo.py

Environment variables:
    SLACK_SIGNING_SECRET - Signing secret from the Slack app's Basic Information page
    SLACK_INTERACTIONS_ENV - Set to "development" to see error text in 500 responses
"""

from flask import Flask, jsonify
from werkzeug.middleware.dispatcher import DispatcherMiddleware

from slack_interactive_messages import Environment, ParsedEvent, VerifierConfig
from slack_interactive_messages.middleware import InteractiveMessagesWSGIApp


def dispatch(event: ParsedEvent):
    """Answer button clicks with an ephemeral acknowledgement."""
    if event.type in ("block_actions", "interactive_message"):
        actions = event.body.get("actions") or [{}]
        return {
            "status": 200,
            "content": {
                "response_type": "ephemeral",
                "replace_original": False,
                "text": f"You clicked {actions[0].get('value', 'something')}",
            },
        }
    return None


config = VerifierConfig.from_env(dispatch)

app = Flask(__name__)

# Serve Slack interactivity from /slack/actions, everything else from Flask
app.wsgi_app = DispatcherMiddleware(app.wsgi_app, {
    "/slack/actions": InteractiveMessagesWSGIApp(config),
})


@app.route("/")
def root():
    """API info endpoint."""
    return jsonify({
        "service": "Slack Interactive Messages Flask Demo",
        "development": config.environment is Environment.DEVELOPMENT,
        "endpoints": {
            "/slack/actions": "Slack Interactivity Request URL (POST)",
            "/health": "Health check",
        },
    })


@app.route("/health")
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8010, debug=True)
