"""CLI entry point for git-integrate.

Usage::

    $ git-integrate 42 release

fetches every remote, resets ``release`` to ``origin/master`` and merges the
head branch of every pull request in milestone 42 into it, one by one.

This module is the only place where errors become exit codes:

    0    every branch merged (or there was nothing to merge)
    1    fetch, checkout, conflict, failed commit, configuration or query error
    2    usage error (reported by click)
    130  interrupted
"""

import sys
from pathlib import Path

import click
import structlog

from git_integrate import __version__
from git_integrate.config.settings import IntegrateSettings
from git_integrate.engine.orchestrator import IntegrationOrchestrator
from git_integrate.engine.types import IntegrationRun, MergeOutcome
from git_integrate.exceptions import GitIntegrateError, IntegrationHalt, MergeConflictError
from git_integrate.git.accessor import GitRepositoryAccessor
from git_integrate.git.discovery import GitDiscovery
from git_integrate.github.client import GitHubGraphQLClient
from git_integrate.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)


def _echo_summary(run: IntegrationRun) -> None:
    auto = [r.branch for r in run.results if r.outcome is MergeOutcome.COMMITTED_AUTO_MERGE]
    click.echo(f"\nIntegrated {len(run.merged)} branch(es) into {run.destination_branch}")
    for branch in auto:
        click.echo(f"  {branch} (merge committed)")


def _echo_halt(error: IntegrationHalt) -> None:
    if isinstance(error, MergeConflictError):
        click.echo(f"\n{error.guidance}")
    else:
        click.echo(f"\n{error.message}", err=True)

    merged = error.run.merged
    if merged:
        click.echo(f"\nAlready merged into {error.run.destination_branch}: {', '.join(merged)}")
    not_attempted = error.run.not_attempted
    if not_attempted:
        click.echo(f"Not attempted: {', '.join(not_attempted)}")


def integrate(
    milestone: int,
    branch: str,
    settings: IntegrateSettings,
    label: str | None = None,
    repo_path: str | Path = ".",
) -> IntegrationRun:
    """Discover the repository and run the integration.

    Identity and token are resolved before any fetch, checkout or HTTP
    request happens.

    Raises:
        GitIntegrateError: On any configuration, query or git failure.
    """
    discovery = GitDiscovery(repo_path)
    identity = discovery.parse_repository(settings.remote)
    token = settings.token_value() or discovery.get_github_token()

    accessor = GitRepositoryAccessor(
        discovery.working_dir,
        remote=settings.remote,
        base_branch=settings.base_branch,
    )

    with GitHubGraphQLClient(token, api_url=settings.api_url, timeout=settings.http_timeout) as resolver:
        orchestrator = IntegrationOrchestrator(accessor, resolver)
        return orchestrator.run(identity, milestone, branch, label=label)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("milestone", type=int, metavar="MILESTONE")
@click.argument("branch", metavar="BRANCH")
@click.option("--label", default=None, help="Select pull requests by this label instead of the milestone")
@click.option("--base", "base_branch", default=None, help="Remote branch to reset BRANCH to (default: master)")
@click.option("--remote", default=None, help="Remote holding the branches (default: origin)")
@click.option("--log-level", default=None, help="Logging level (default: WARNING)")
@click.version_option(__version__, prog_name="git-integrate")
def cli(
    milestone: int,
    branch: str,
    label: str | None,
    base_branch: str | None,
    remote: str | None,
    log_level: str | None,
) -> None:
    """Merge the pull request branches of GitHub milestone MILESTONE into BRANCH.

    BRANCH is reset to the remote base branch first; any local commits on it
    are discarded. The GitHub token is read from the GIT_INTEGRATE_GITHUB_TOKEN
    environment variable or the integrate.github-token git configuration key.
    """
    try:
        settings = IntegrateSettings.load(base_branch=base_branch, remote=remote, log_level=log_level)
    except GitIntegrateError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    configure_logging(settings.log_level)

    try:
        run = integrate(milestone, branch, settings, label=label)
    except IntegrationHalt as e:
        _echo_halt(e)
        log.debug("integration_halted", branch=e.branch, exc_info=True)
        sys.exit(1)
    except GitIntegrateError as e:
        click.echo(f"Error: {e}", err=True)
        log.debug("integration_error", exc_info=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        log.error("integration_unexpected", exc_info=True)
        sys.exit(1)

    _echo_summary(run)


if __name__ == "__main__":
    cli()
