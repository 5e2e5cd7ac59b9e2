"""Core application components."""

# Import in correct order to avoid circular dependencies
from core.logger import setup_logger, get_logger
from core.constants import (
    CampaignLimits,
    LcgDefaults,
    MintingDefaults,
    AuditDefaults,
    DrawMode,
    CampaignEventType,
    RejectionReason,
)
from core.exceptions import (
    ApplicationError,
    ConfigurationError,
    DatabaseError,
    RepositoryError,
    ServiceError,
    MintingError,
    CampaignError,
    CampaignValidationError,
    CampaignPreconditionError,
    CampaignInvariantError,
)

__all__ = [
    # Initializer
    'ApplicationInitializer',
    # Logging
    'setup_logger',
    'get_logger',
    # Constants
    'CampaignLimits',
    'LcgDefaults',
    'MintingDefaults',
    'AuditDefaults',
    'DrawMode',
    'CampaignEventType',
    'RejectionReason',
    # Exceptions
    'ApplicationError',
    'ConfigurationError',
    'DatabaseError',
    'RepositoryError',
    'ServiceError',
    'MintingError',
    'CampaignError',
    'CampaignValidationError',
    'CampaignPreconditionError',
    'CampaignInvariantError',
]

# Import ApplicationInitializer last to avoid circular imports
from core.app_initializer import ApplicationInitializer
