from .conversation_controller import ConversationController

__all__ = ["ConversationController"]
