"""Build the process-wide ChatService from settings."""

from storechat.chat.memory import SessionStore
from storechat.chat.service import ChatService
from storechat.config import Settings
from storechat.llm.gateway import LiteLLMGateway
from storechat.routing.cache import IntentCache
from storechat.routing.classifier import IntentClassifier


def build_chat_service(settings: Settings) -> ChatService:
    """Wire gateway, intent cache, classifier and session store."""
    gateway = LiteLLMGateway(settings)
    classifier = IntentClassifier(
        gateway,
        IntentCache(ttl_seconds=settings.intent_cache_ttl_seconds),
    )
    sessions = SessionStore(
        idle_timeout_seconds=settings.session_idle_timeout_seconds
    )
    return ChatService(
        gateway,
        classifier,
        sessions,
        default_model=settings.default_model,
        history_window=settings.history_window,
    )
