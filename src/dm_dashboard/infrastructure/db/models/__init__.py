"""Import all models so Alembic can discover them via Base.metadata."""
from dm_dashboard.infrastructure.db.models.ai_config import AIConfigModel
from dm_dashboard.infrastructure.db.models.conversation import ConversationModel
from dm_dashboard.infrastructure.db.models.message import MessageModel

__all__ = [
    "AIConfigModel",
    "ConversationModel",
    "MessageModel",
]
