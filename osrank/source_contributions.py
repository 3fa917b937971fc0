"""Collect the maintainers of a platform's projects from the GitHub API."""

from __future__ import annotations

import argparse
import csv
import itertools
import os
import re
import sys
import time
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Any, TextIO

import requests

GITHUB_BASE_URL = "https://api.github.com"
TOKEN_ENV_VAR = "OSRANK_GITHUB_TOKEN"

_RETRY_DELAY = 1.0
_REQUEST_DELAY = 0.8
_DEFAULT_RETRIES = 5
_U32_RE = re.compile(r"\+?\d+")

_FORK_VALUES = {
    "0": False,
    "1": True,
    "t": True,
    "f": False,
    "true": True,
    "false": False,
}


class GithubError(Exception):
    """Raised when the GitHub API cannot give a usable answer."""

    def __init__(
        self, message: str, status: int | None = None, body: str | None = None
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


@dataclass(frozen=True)
class Project:
    """The fields of a projects dump record that matter here."""

    id: int
    platform: str
    project_name: str
    repository_url: str
    repository_fork: bool
    repository_display_name: str


@dataclass(frozen=True)
class GithubContribution:
    """One entry of the GitHub contributor statistics."""

    total: int
    login: str
    author_id: int
    weeks: tuple[int, ...] = ()

    @classmethod
    def from_json(cls, data: Any) -> GithubContribution:
        """Build from the decoded JSON; raises KeyError or TypeError if malformed."""
        author = data["author"]
        return cls(
            total=int(data["total"]),
            login=str(author["login"]),
            author_id=int(author["id"]),
            weeks=tuple(int(week["w"]) for week in data["weeks"]),
        )


def deserialise_project(record: Sequence[str]) -> Project | None:
    """Pick a project out of a projects record, or None if it is incomplete."""
    fields = list(record)

    def get(index: int) -> str | None:
        return fields[index] if index < len(fields) else None

    pid = get(0)
    if pid is None or _U32_RE.fullmatch(pid) is None or int(pid) >= 2**32:
        return None

    platform = get(1)
    project_name = get(2)
    repository_url = get(9)
    fork_text = get(24)
    repository_fork = _FORK_VALUES.get(fork_text) if fork_text is not None else None
    display_name = get(54)

    if None in (platform, project_name, repository_url, repository_fork, display_name):
        return None
    return Project(
        id=int(pid),
        platform=platform,
        project_name=project_name,
        repository_url=repository_url,
        repository_fork=repository_fork,
        repository_display_name=display_name,
    )


def extract_github_owner_and_repo(repo_url: str) -> tuple[str, str]:
    """Split ``scheme://github.com/owner/repo`` into owner and repo."""
    parts = repo_url.split("/")
    if len(parts) == 5 and parts[1] == "" and parts[2] == "github.com":
        return parts[3], parts[4]
    raise ValueError(f"Couldn't extract project metadata for {repo_url}")


def is_maintainer(owner: str, contribution: GithubContribution, stats_len: int) -> bool:
    """Whether a contributor counts as a maintainer of the repository.

    True for the repository owner, for anyone with more than 50
    contributions, and for the sole contributor.
    """
    return contribution.login == owner or contribution.total > 50 or stats_len == 1


def call_github(
    session: requests.Session,
    token: str,
    url_path: str,
    retries: int = _DEFAULT_RETRIES,
) -> Any:
    """GET ``url_path`` from the GitHub API and return the decoded JSON.

    A 202 answer means GitHub is still computing the data: wait a second
    and try again, up to ``retries`` attempts in total.
    """
    url = f"{GITHUB_BASE_URL}{url_path}"
    headers = {"Authorization": f"Bearer {token}"}
    for remaining in range(retries, 0, -1):
        response = session.get(url, headers=headers)
        if response.status_code == 200:
            try:
                return response.json()
            except ValueError as exc:
                raise GithubError(
                    f"Couldn't deserialise the JSON returned by Github: {exc}"
                ) from exc
        if response.status_code == 202:
            print(f"Retrying, only {remaining} retries left ...")
            time.sleep(_RETRY_DELAY)
            continue
        body = response.text
        raise GithubError(
            f"Github returned non-200 {response.status_code} with body {body}",
            status=response.status_code,
            body=body,
        )
    raise GithubError("No more retries.")


def _fetch_contributions(
    session: requests.Session, token: str, owner: str, name: str
) -> list[GithubContribution]:
    stats = call_github(
        session, token, f"/repos/{owner}/{name}/stats/contributors", _DEFAULT_RETRIES
    )
    try:
        return [GithubContribution.from_json(item) for item in stats]
    except (KeyError, TypeError, ValueError) as exc:
        raise GithubError(
            f"Couldn't deserialise the JSON returned by Github: {exc!r}"
        ) from exc


def _extract_contribution(
    session: requests.Session,
    out: TextIO,
    unique_projects: set[str],
    project: Project,
    token: str,
) -> None:
    if project.repository_fork or project.project_name in unique_projects:
        return
    try:
        owner, name = extract_github_owner_and_repo(project.repository_url)
    except ValueError as err:
        print(f"Skipping {project.repository_url} due to {err}")
        return

    unique_projects.add(project.project_name)
    print(f"Processing {project.project_name} ({owner}/{name})")
    try:
        stats = _fetch_contributions(session, token, owner, name)
    except (GithubError, requests.RequestException) as err:
        print(f"Skipping {project.repository_url} due to {err}")
    else:
        for contribution in stats:
            if is_maintainer(owner, contribution, len(stats)):
                out.write(
                    f"{project.id},github@{contribution.login},"
                    f"{project.repository_url},{contribution.total},"
                    f"{project.project_name}\n"
                )
    # Stay under the hourly request quota.
    time.sleep(_REQUEST_DELAY)


def _records(source: Iterable[str]) -> Iterator[list[str]]:
    reader = csv.reader(source)
    next(reader, None)
    for row in reader:
        if row:
            yield row


def _repository_url(record: Sequence[str]) -> str | None:
    return record[9] if len(record) > 9 else None


def source_contributors(
    github_token: str,
    path: str | PathLike,
    platform: str,
    resume_from: str | None = None,
) -> None:
    """Write the maintainers of ``platform``'s projects to ``data/<platform>_contributions.csv``.

    Without ``resume_from`` the output file must not exist yet. With it, the
    existing file is appended to, starting after the record whose
    repository URL equals ``resume_from``.
    """
    output = Path("data") / f"{platform.lower()}_contributions.csv"
    with open(path, newline="", encoding="utf-8") as source:
        if resume_from is None:
            mode = "x"
        else:
            if not output.exists():
                raise FileNotFoundError(f"No such file to resume: {output}")
            mode = "a"
        with open(output, mode, encoding="utf-8") as out, requests.Session() as session:
            if resume_from is None:
                out.write("ID,MAINTAINER,REPO,CONTRIBUTIONS,NAME\n")

            records: Iterator[list[str]] = (
                record
                for record in _records(source)
                if len(record) > 1 and record[1] == platform
            )
            if resume_from is not None:
                records = itertools.dropwhile(
                    lambda record: _repository_url(record) != resume_from, records
                )
                # The resumed record itself was already processed.
                next(records, None)

            unique_projects: set[str] = set()
            for record in records:
                project = deserialise_project(record)
                if project is not None:
                    _extract_contribution(
                        session, out, unique_projects, project, github_token
                    )


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point; the token is read from the environment."""
    github_token = os.environ.get(TOKEN_ENV_VAR)
    if github_token is None:
        print(f"Couldn't find {TOKEN_ENV_VAR} in your env vars", file=sys.stderr)
        return 1

    parser = argparse.ArgumentParser(
        prog="source_contributions",
        description="Source contributions from Github.",
    )
    parser.add_argument("input", help="Where to read the projects data from.")
    parser.add_argument("platform", help="Example: Rust,NPM,Rubygems,..")
    parser.add_argument(
        "--resume-from", default=None, help="which repository URL to resume from."
    )
    args = parser.parse_args(argv)
    source_contributors(github_token, args.input, args.platform, args.resume_from)
    return 0