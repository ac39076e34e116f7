"""Global constants for shipwright"""

APP_NAME = "shipwright"
LOG_FORMAT = "%(message)s"
FILE_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Project layout
PROJECT_DIR = ".shipwright"
CONFIG_DIR = "config"
ENVIRONMENT_DIR = "environment"
GENERAL_CONFIG_FILE = "general.yml"
ENVIRONMENT_FILE_PATTERN = "{environment}.yml"
LOCK_FILE_PATTERN = "{environment}.lock"
LOGS_DIR = "logs"
LOG_FILE_PATTERN = "log-{timestamp}.log"
CUSTOM_TASKS_DIR = "tasks"

# Releases
DEFAULT_RELEASES_DIR = "releases"
DEFAULT_RELEASES_MAX = 10
CURRENT_LINK_NAME = "current"
RELEASE_ID_FORMAT = "%Y%m%d%H%M%S"
RELEASE_ARCHIVE_PATTERN = "{release_id}.tar.gz"
RELEASE_TEMP_SUFFIX = "_tmp/"

# Shared caches
DEFAULT_SHARED_DIR = "shared"
DEFAULT_GIT_CACHE_DIR = "git-remote-cache"
DEFAULT_RSYNC_CACHE_DIR = "rsync-remote-cache"

# SSH
DEFAULT_SSH_PORT = 22
SSH_HOST_OPTIONS = "-q -o UserKnownHostsFile=/dev/null -o StrictHostKeyChecking=no"

# Composer
DEFAULT_COMPOSER_CMD = "php composer.phar"

# Logging
DEFAULT_MAX_LOGS = 30

# Custom task prefix
CUSTOM_TASK_PREFIX = "custom/"


# Error codes
class ErrorCode:
    CONFIG_FORMAT_ERROR = "SW001"
    ENVIRONMENT_NOT_FOUND = "SW002"
    ENVIRONMENT_LOCKED = "SW003"
    TASK_NOT_FOUND = "SW004"
    DEPLOYMENT_FAILED = "SW005"
    TASK_FAILED = "SW100"


# Environment variables
ENV_PROJECT_ROOT = "SHIPWRIGHT_PROJECT_ROOT"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_SKIP = "↷"
EMOJI_ARROW = "→"
EMOJI_LOCK = "🔒"
EMOJI_ROCKET = "🚀"

# Messages templates
MSG_UNLOCKED = "Unlocked deployment to [magenta]{environment}[/magenta] environment"
MSG_LOCKED = f"{EMOJI_LOCK} Locked deployment to [magenta]{{environment}}[/magenta] environment"
