"""Domain probes for the listener application services.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from listeners.application.observability.confirmation_probe import (
    ConfirmationProbe,
    DefaultConfirmationProbe,
)
from listeners.application.observability.dispatch_probe import (
    DefaultDispatchProbe,
    DispatchProbe,
)
from listeners.application.observability.runner_probe import (
    DefaultRunnerProbe,
    RunnerProbe,
)

__all__ = [
    "ConfirmationProbe",
    "DefaultConfirmationProbe",
    "DefaultDispatchProbe",
    "DefaultRunnerProbe",
    "DispatchProbe",
    "RunnerProbe",
]
