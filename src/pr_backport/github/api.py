"""GitHub REST API wrapper.

Every call takes the `Config` explicitly; the access token is sent in the
Authorization header of a short-lived client and never stored at module
level.  ``api_hostname`` allows GitHub Enterprise installations
(``github.example.com/api/v3``).
"""

from __future__ import annotations

import json as jsonlib
import logging
from collections.abc import Sequence

import httpx

from ..config import Config
from ..constants import COMMITS_PER_PAGE, COMMITS_PER_PAGE_BY_AUTHOR, DEFAULT_SOURCE_BRANCH
from ..errors import GithubApiError, NotFoundError, UnauthorizedError, UnexpectedError
from ..models import Commit, PullRequest, PullRequestPayload
from ..policy.redaction import redact_secrets
from .auth import get_github_client

logger = logging.getLogger(__name__)

COMMIT_SEARCH_PREVIEW = "application/vnd.github.cloak-preview"


def _api_url(api_hostname: str, path: str) -> str:
    return f"https://{api_hostname.rstrip('/')}/{path.lstrip('/')}"


def _github_request(
    config: Config,
    method: str,
    url: str,
    *,
    params: dict[str, object] | None = None,
    json: object | None = None,
    accept: str | None = None,
) -> object | None:
    """Perform an HTTP request against the GitHub API.

    Error responses that carry a body become a `GithubApiError` whose
    message is that body rendered as JSON, plus the failing URL.  Transport
    failures and empty error responses raise `UnexpectedError`.
    """
    client_kwargs = {"accept": accept} if accept else {}
    try:
        with get_github_client(config, **client_kwargs) as client:
            resp = client.request(method, url, params=params, json=json)
    except httpx.HTTPError as exc:
        logger.error("GitHub API request failed: %s", exc)
        raise UnexpectedError(f"GitHub API request failed: {redact_secrets(str(exc), [config.github_token])}") from exc

    if 200 <= resp.status_code < 300:
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return resp.text

    raise _api_error(config, resp, url)


def _api_error(config: Config, resp: httpx.Response, url: str) -> Exception:
    logger.debug("GitHub API error %s: %s", resp.status_code, resp.text)
    try:
        payload = resp.json()
    except ValueError:
        payload = resp.text or None

    if not payload:
        return UnexpectedError(f"GitHub API error {resp.status_code} for {url}")

    body = dict(payload) if isinstance(payload, dict) else {"response": payload}
    body["requestUrl"] = url
    message = redact_secrets(jsonlib.dumps(body, indent=4), [config.github_token])
    return GithubApiError(message, status_code=resp.status_code, url=url, payload=payload)


def get_commit_message(message: str) -> str:
    """Return the first line of a commit message."""
    return message.split("\n")[0].strip()


def fetch_pull_request_number_by_sha(
    config: Config,
    owner: str,
    repo_name: str,
    sha: str,
    api_hostname: str,
    base_branch: str = DEFAULT_SOURCE_BRANCH,
) -> int | None:
    """Return the number of the pull request that merged ``sha``, if any."""
    url = _api_url(api_hostname, "search/issues")
    params = {"q": f"repo:{owner}/{repo_name} {sha} base:{base_branch}"}
    data = _github_request(config, "GET", url, params=params)
    items = (data or {}).get("items") or []
    if not items:
        return None
    return items[0].get("number")


def fetch_commit_by_sha(
    config: Config,
    owner: str,
    repo_name: str,
    sha: str,
    api_hostname: str,
    base_branch: str = DEFAULT_SOURCE_BRANCH,
) -> Commit:
    """Look up a commit (full or abbreviated sha) and the pull request it came from.

    The pull request is searched among those merged into ``base_branch``.
    """
    url = _api_url(api_hostname, "search/commits")
    params = {"q": f"hash:{sha} repo:{owner}/{repo_name}", "per_page": 1}
    data = _github_request(config, "GET", url, params=params, accept=COMMIT_SEARCH_PREVIEW)

    items = (data or {}).get("items") or []
    if not items:
        raise NotFoundError(f"No commit found for SHA: {sha}")

    found = items[0]
    full_sha = found["sha"]
    return Commit(
        sha=full_sha,
        message=get_commit_message(found["commit"]["message"]),
        pull_number=fetch_pull_request_number_by_sha(config, owner, repo_name, full_sha, api_hostname, base_branch),
    )


def fetch_commits_by_author(
    config: Config,
    owner: str,
    repo_name: str,
    author: str | None,
    api_hostname: str,
    base_branch: str = DEFAULT_SOURCE_BRANCH,
) -> list[Commit]:
    """Return the latest commits on ``base_branch``.

    With ``author`` set only that user's commits are listed, and fewer of
    them.  Pull request numbers are resolved one commit at a time.
    """
    params: dict[str, object] = {"sha": base_branch, "per_page": COMMITS_PER_PAGE}
    if author:
        params["author"] = author
        params["per_page"] = COMMITS_PER_PAGE_BY_AUTHOR

    url = _api_url(api_hostname, f"repos/{owner}/{repo_name}/commits")
    data = _github_request(config, "GET", url, params=params) or []

    commits = []
    for item in data:
        sha = item["sha"]
        commits.append(
            Commit(
                sha=sha,
                message=get_commit_message(item["commit"]["message"]),
                pull_number=fetch_pull_request_number_by_sha(config, owner, repo_name, sha, api_hostname, base_branch),
            )
        )
    return commits


def create_pull_request(
    config: Config,
    owner: str,
    repo_name: str,
    payload: PullRequestPayload,
    api_hostname: str,
) -> PullRequest:
    """Open a pull request on the upstream repository."""
    url = _api_url(api_hostname, f"repos/{owner}/{repo_name}/pulls")
    data = _github_request(config, "POST", url, json=payload.as_dict())
    return PullRequest(url=data["html_url"], number=data["number"])


def add_labels_to_pull_request(
    config: Config,
    owner: str,
    repo_name: str,
    pull_number: int,
    labels: Sequence[str],
    api_hostname: str,
) -> None:
    url = _api_url(api_hostname, f"repos/{owner}/{repo_name}/issues/{pull_number}/labels")
    _github_request(config, "POST", url, json=list(labels))


def verify_access_token(config: Config, owner: str, repo_name: str, api_hostname: str) -> None:
    """Check that the token can see the repository.

    Raises `UnauthorizedError` for an invalid token or missing scopes and
    `NotFoundError` when the repository does not exist.
    """
    url = _api_url(api_hostname, f"repos/{owner}/{repo_name}")
    try:
        with get_github_client(config) as client:
            resp = client.head(url)
    except httpx.HTTPError as exc:
        raise UnexpectedError(f"GitHub API request failed: {redact_secrets(str(exc), [config.github_token])}") from exc

    if 200 <= resp.status_code < 300:
        return

    granted_scopes = resp.headers.get("x-oauth-scopes")
    required_scopes = resp.headers.get("x-accepted-oauth-scopes")

    if resp.status_code == 401:
        raise UnauthorizedError("Please check your access token and make sure it is valid")
    if resp.status_code == 404:
        if granted_scopes == required_scopes:
            raise NotFoundError(f'The repository "{owner}/{repo_name}" doesn\'t exist')
        raise UnauthorizedError(
            f'You do not have access to the repository "{owner}/{repo_name}". '
            "Please make sure your access token has the required scopes.\n\n"
            f"Required scopes: {required_scopes}\nAccess token scopes: {granted_scopes}"
        )
    raise UnexpectedError(f"Unexpected status verifying access token: {resp.status_code}")
