"""Shared infrastructure dependencies.

Provides ONLY application-scoped shared resources (the event recorder and
the message source). Does NOT import from the listeners package.
"""

from functools import lru_cache

from infrastructure.messaging import InMemoryMessageBroker, KafkaMessageSource
from infrastructure.settings import BrokerSettings, get_broker_settings
from shared_kernel.messaging.ports import MessageSource
from shared_kernel.recording import InMemoryEventRecorder


@lru_cache
def get_event_recorder() -> InMemoryEventRecorder:
    """Get the application-scoped event recorder (singleton).

    Listeners write into it and the query API reads from it.
    """
    return InMemoryEventRecorder()


def create_message_source(settings: BrokerSettings | None = None) -> MessageSource:
    """Build the message source selected by the broker settings.

    Args:
        settings: Broker settings; defaults to the cached environment settings

    Returns:
        An in-memory broker or a Kafka consumer source.
    """
    settings = settings or get_broker_settings()
    if settings.kind == "kafka":
        return KafkaMessageSource(
            bootstrap_servers=settings.bootstrap_servers,
            group_id=settings.group_id,
            auto_offset_reset=settings.auto_offset_reset,
        )
    return InMemoryMessageBroker()
