STDIN_SOURCE: str = "-"

DEFAULT_TOP: int = 10
DEFAULT_PERCENTILE: int = 95

PROJECT_DIST: str = "querylog-top"

# Exit status when the installed version cannot be resolved
NO_BUILD_INFO_EXIT: int = 13

ENV_FILE: str = ".env"
ENV_PREFIX: str = "QUERYLOG_"
