"""Constants for the chat workspace."""

SESSIONS_PATH = "/chat/sessions"
NEW_SESSION_PATH = "/chat/new-session"
HISTORY_PATH = "/chat/history"
QUERY_PATH = "/chat/query"
AUDIO_PATH = "/chat/audio"

APOLOGY_MESSAGE = "Sorry, I encountered an error while processing your request."
LOADING_MESSAGE = "The agent is thinking..."
LOGIN_PROMPT_TITLE = "Log In"
LOGIN_PROMPT = "Please log in or register to use the chatbot."
REPLY_PENDING_TITLE = "Please wait"
REPLY_PENDING_MESSAGE = "The agent is still answering your previous question."

__all__ = [
    "SESSIONS_PATH",
    "NEW_SESSION_PATH",
    "HISTORY_PATH",
    "QUERY_PATH",
    "AUDIO_PATH",
    "APOLOGY_MESSAGE",
    "LOADING_MESSAGE",
    "LOGIN_PROMPT_TITLE",
    "LOGIN_PROMPT",
    "REPLY_PENDING_TITLE",
    "REPLY_PENDING_MESSAGE",
]
