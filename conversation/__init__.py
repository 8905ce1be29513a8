from conversation.engine import SessionEngine
from conversation.history import HistoryStore
from conversation.models import Message, ReasoningReply, Role, SimpleReply

__all__ = ["HistoryStore", "Message", "ReasoningReply", "Role", "SessionEngine", "SimpleReply"]
