"""Global constants for pr-backport.

These values serve as defaults for configuration and for the naming rules
applied to feature branches and pull request titles.  Override the
environment variables rather than editing these values.
"""

import os

# Hosts
DEFAULT_API_HOSTNAME = os.environ.get("BACKPORT_API_HOSTNAME", "api.github.com")
DEFAULT_GIT_HOSTNAME = os.environ.get("BACKPORT_GIT_HOSTNAME", "github.com")

# Working copies live under <home>/repositories/<owner>/<repo>
DEFAULT_BACKPORT_HOME = os.environ.get("BACKPORT_HOME", os.path.join("~", ".backport"))

# Branch the working copy is reset to before every target branch
DEFAULT_SOURCE_BRANCH = "master"

# Pull request defaults
DEFAULT_PR_TITLE = "[{baseBranch}] {commitMessages}"
PR_BODY_PREAMBLE = "Backports the following commits to {base_branch}:"

# Ref names and titles are cut to this many characters
MAX_REF_SEGMENT_LENGTH = 200
MAX_COMMIT_MESSAGES_LENGTH = 200
SHORT_SHA_LENGTH = 7

# Commit listing
COMMITS_PER_PAGE = 10
COMMITS_PER_PAGE_BY_AUTHOR = 5

# Limits
COMMAND_TIMEOUT_S = int(os.environ.get("BACKPORT_COMMAND_TIMEOUT_S", 600))
HTTP_TIMEOUT_S = 10.0

# Project config file looked up in the current directory
PROJECT_CONFIG_FILE = ".backportrc.json"

# Logging
DEFAULT_LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
