"""Module holding constants used across gsu."""

DEFAULT_GIT_BIN = "git"
DEFAULT_REMOTE = "origin"
DEFAULT_JOBS = 1
DEFAULT_DEPTH = 1
DETACHED_HEAD = "HEAD"
GIT_DIR_ENTRY = ".git"
ENV_PREFIX = "GSU_"
