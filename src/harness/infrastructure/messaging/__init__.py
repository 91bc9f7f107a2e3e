"""Message source adapters.

Implementations of the shared_kernel MessageSource port.
"""

from infrastructure.messaging.in_memory import InMemoryMessageBroker
from infrastructure.messaging.kafka import KafkaMessageSource

__all__ = ["InMemoryMessageBroker", "KafkaMessageSource"]
