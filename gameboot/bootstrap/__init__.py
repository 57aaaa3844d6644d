# Bootstrap package exports

from .errors import (
    BootstrapError,
    BootstrapInProgressError,
    FundingExhaustedError,
    InitError,
    RegistrationFailedError,
    StepTransitionError,
    UnknownStepError,
)
from .funding import FundingProvisioner
from .initializer import GameInitializer
from .models import (
    BOOTSTRAP_STEPS,
    STEP_FUNDING,
    STEP_INIT,
    Actor,
    BootstrapOutcome,
    BootstrapResult,
    FundingOutcome,
    FundingStatus,
    ProviderError,
    RunState,
    StepState,
    StepStatus,
    StepTransition,
)
from .orchestrator import BootstrapOrchestrator
from .providers import BackendGrantStrategy, ProviderStrategy, RpcAirdropStrategy
from .tracker import StepStatusTracker

__all__ = [
    # Orchestration
    "BootstrapOrchestrator",
    "FundingProvisioner",
    "GameInitializer",
    "StepStatusTracker",

    # Providers
    "ProviderStrategy",
    "RpcAirdropStrategy",
    "BackendGrantStrategy",

    # Models
    "BOOTSTRAP_STEPS",
    "STEP_FUNDING",
    "STEP_INIT",
    "Actor",
    "BootstrapOutcome",
    "BootstrapResult",
    "FundingOutcome",
    "FundingStatus",
    "ProviderError",
    "RunState",
    "StepState",
    "StepStatus",
    "StepTransition",

    # Errors
    "BootstrapError",
    "BootstrapInProgressError",
    "FundingExhaustedError",
    "InitError",
    "RegistrationFailedError",
    "StepTransitionError",
    "UnknownStepError",
]
