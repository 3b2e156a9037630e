# Path: retriever/constants.py
"""
Retriever Module Constants

Module-wide constants for metadata retrieval and materialization.
Type catalogs and per-type lookup tables live in engine/constants.py.

Paths here are defaults only; config_loader overrides them from .env.
"""

# ============================================================================
# HTTP STATUS CODES
# ============================================================================
HTTP_BAD_REQUEST: int = 400

# ============================================================================
# TRANSPORT DEFAULTS
# ============================================================================
DEFAULT_TIMEOUT: int = 300  # 5 minutes, large org retrievals are slow
DEFAULT_CONNECT_TIMEOUT: int = 30

# ============================================================================
# EXTRACTION DEFAULTS
# ============================================================================
MAX_ARCHIVE_SIZE: int = 524288000  # 500MB
MAX_EXTRACTION_DEPTH: int = 25

# ============================================================================
# FILE LAYOUT
# ============================================================================
DEFAULT_SOURCE_DIRNAME: str = 'src'
PACKAGE_XML_NAME: str = 'package.xml'
AURA_DIRNAME: str = 'aura'
BUNDLE_MANIFEST_NAME: str = '.manifest'
PRESERVED_ARCHIVE_SUFFIX: str = '.zip'

# ============================================================================
# IPO LOGGING PREFIXES
# ============================================================================
LOG_INPUT: str = '[INPUT]'
LOG_PROCESS: str = '[PROCESS]'
LOG_OUTPUT: str = '[OUTPUT]'

# ============================================================================
# LOGGING COMPONENTS
# ============================================================================
LOGGER_ROOT: str = 'retriever'
LOGGER_CORE: str = 'retriever.core'
LOGGER_ENGINE: str = 'retriever.engine'
LOGGER_CLI: str = 'retriever.cli'
LOGGER_EXTRACTION: str = 'retriever.extraction'

# ============================================================================
# LOG FORMAT
# ============================================================================
LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'
LOG_ACTIVITY_FILE: str = 'retriever_activity.log'
LOG_ERROR_FILE: str = 'errors.log'
DEFAULT_LOG_LEVEL: str = 'WARNING'

# ============================================================================
# ENVIRONMENT VARIABLE KEYS (for reference in config_loader.py)
# ============================================================================
ENV_FILE: str = 'RETRIEVER_ENV_FILE'
ENV_SOURCE_DIR: str = 'RETRIEVER_SOURCE_DIR'
ENV_SERVICE_URL: str = 'RETRIEVER_SERVICE_URL'
ENV_ACCESS_TOKEN: str = 'RETRIEVER_ACCESS_TOKEN'
ENV_REQUEST_TIMEOUT: str = 'RETRIEVER_REQUEST_TIMEOUT'
ENV_CONNECT_TIMEOUT: str = 'RETRIEVER_CONNECT_TIMEOUT'
ENV_MAX_ARCHIVE_SIZE: str = 'RETRIEVER_MAX_ARCHIVE_SIZE'
ENV_MAX_EXTRACTION_DEPTH: str = 'RETRIEVER_MAX_EXTRACTION_DEPTH'
ENV_LOG_LEVEL: str = 'RETRIEVER_LOG_LEVEL'
ENV_LOG_CONSOLE: str = 'RETRIEVER_LOG_CONSOLE'
ENV_LOG_DIR: str = 'RETRIEVER_LOG_DIR'

# ============================================================================
# EXPORTS
# ============================================================================
__all__ = [
    # HTTP Status Codes
    'HTTP_BAD_REQUEST',

    # Transport Defaults
    'DEFAULT_TIMEOUT',
    'DEFAULT_CONNECT_TIMEOUT',

    # Extraction Defaults
    'MAX_ARCHIVE_SIZE',
    'MAX_EXTRACTION_DEPTH',

    # File Layout
    'DEFAULT_SOURCE_DIRNAME',
    'PACKAGE_XML_NAME',
    'AURA_DIRNAME',
    'BUNDLE_MANIFEST_NAME',
    'PRESERVED_ARCHIVE_SUFFIX',

    # IPO Logging Prefixes
    'LOG_INPUT',
    'LOG_PROCESS',
    'LOG_OUTPUT',

    # Logging Components
    'LOGGER_ROOT',
    'LOGGER_CORE',
    'LOGGER_ENGINE',
    'LOGGER_CLI',
    'LOGGER_EXTRACTION',

    # Log Format
    'LOG_FORMAT',
    'LOG_DATE_FORMAT',
    'LOG_ACTIVITY_FILE',
    'LOG_ERROR_FILE',
    'DEFAULT_LOG_LEVEL',

    # Environment Variable Keys
    'ENV_FILE',
    'ENV_SOURCE_DIR',
    'ENV_SERVICE_URL',
    'ENV_ACCESS_TOKEN',
    'ENV_REQUEST_TIMEOUT',
    'ENV_CONNECT_TIMEOUT',
    'ENV_MAX_ARCHIVE_SIZE',
    'ENV_MAX_EXTRACTION_DEPTH',
    'ENV_LOG_LEVEL',
    'ENV_LOG_CONSOLE',
    'ENV_LOG_DIR',
]
