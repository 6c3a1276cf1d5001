"""``kuberoot`` command-line entry point.

Exit codes:
    0 -- scan completed, whatever the number of root or error containers.
    1 -- no cluster session (AuthError) or namespaces could not be listed.
    2 -- invalid configuration or usage (raised by click).
"""

from __future__ import annotations

import asyncio
import dataclasses

import click

from kuberoot import __version__
from kuberoot.audit import find_root_containers
from kuberoot.cluster import connect
from kuberoot.config import OUTPUT_FORMATS, load_config, validate_command
from kuberoot.errors import AuthError, EnumerationError
from kuberoot.models.config import KubeRootConfig
from kuberoot.observability.logging import get_logger, setup_logging
from kuberoot.observability.metrics import write_metrics
from kuberoot.report import ReportWebhook, build_payload, render

_LOG_LEVELS = ("debug", "info", "warning", "error")


def _check_command(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return validate_command(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.group()
@click.version_option(__version__, prog_name="kuberoot")
def cli() -> None:
    """Audit a Kubernetes cluster for containers running as root."""


@cli.command()
@click.option("--kubeconfig", type=click.Path(dir_okay=False), default=None, help="Path to a kubeconfig file.")
@click.option("--context", default=None, help="kubeconfig context to use.")
@click.option("--exclude", multiple=True, metavar="NAMESPACE", help="Namespace to skip (repeatable).")
@click.option("--no-default-excludes", is_flag=True, help="Also audit kube-system, kube-public and kube-node-lease.")
@click.option(
    "--command",
    "probe_command",
    default=None,
    callback=_check_command,
    help="Identity command run in each container.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Deadline in seconds for each API call and probe.",
)
@click.option("--output", type=click.Choice(OUTPUT_FORMATS), default=None, help="Report format.")
@click.option("--webhook-url", default=None, help="POST the JSON report to this URL.")
@click.option("--metrics-file", type=click.Path(dir_okay=False), default=None, help="Write Prometheus metrics here.")
@click.option("--log-level", type=click.Choice(_LOG_LEVELS), default=None, help="Log verbosity (logs go to stderr).")
@click.pass_context
def scan(
    ctx: click.Context,
    kubeconfig: str | None,
    context: str | None,
    exclude: tuple[str, ...],
    no_default_excludes: bool,
    probe_command: str | None,
    timeout: float | None,
    output: str | None,
    webhook_url: str | None,
    metrics_file: str | None,
    log_level: str | None,
) -> None:
    """Probe every container and report those running as root."""
    try:
        config = load_config()
    except ValueError as exc:
        raise click.UsageError(f"invalid KUBEROOT_* environment: {exc}") from exc

    config = apply_overrides(
        config,
        kubeconfig=kubeconfig,
        context=context,
        exclude=exclude,
        no_default_excludes=no_default_excludes,
        probe_command=probe_command,
        timeout=timeout,
        output=output,
        webhook_url=webhook_url,
        metrics_file=metrics_file,
        log_level=log_level,
    )
    setup_logging(config.log.level)
    ctx.exit(asyncio.run(run_scan(config)))


def apply_overrides(
    config: KubeRootConfig,
    *,
    kubeconfig: str | None = None,
    context: str | None = None,
    exclude: tuple[str, ...] = (),
    no_default_excludes: bool = False,
    probe_command: str | None = None,
    timeout: float | None = None,
    output: str | None = None,
    webhook_url: str | None = None,
    metrics_file: str | None = None,
    log_level: str | None = None,
) -> KubeRootConfig:
    """Return *config* with command-line values layered over environment values."""
    base_excluded = frozenset() if no_default_excludes else config.audit.excluded_namespaces
    cluster = dataclasses.replace(
        config.cluster,
        kubeconfig=kubeconfig if kubeconfig is not None else config.cluster.kubeconfig,
        context=context if context is not None else config.cluster.context,
    )
    audit = dataclasses.replace(
        config.audit,
        excluded_namespaces=base_excluded | frozenset(exclude),
        probe_command=probe_command if probe_command is not None else config.audit.probe_command,
        request_timeout=timeout if timeout is not None else config.audit.request_timeout,
    )
    report = dataclasses.replace(
        config.report,
        output=output or config.report.output,
        webhook_url=webhook_url if webhook_url is not None else config.report.webhook_url,
        metrics_file=metrics_file if metrics_file is not None else config.report.metrics_file,
    )
    log = dataclasses.replace(config.log, level=log_level or config.log.level)
    return dataclasses.replace(config, cluster=cluster, audit=audit, report=report, log=log)


async def run_scan(config: KubeRootConfig) -> int:
    """Connect, audit, report.  Returns the process exit code."""
    log = get_logger("cli")
    log.info("kuberoot starting", version=__version__)

    try:
        session = await connect(
            kubeconfig=config.cluster.kubeconfig or None,
            context=config.cluster.context or None,
        )
    except AuthError as exc:
        log.critical("fatal startup error", error=str(exc))
        click.echo(f"Error authenticating to the cluster: {exc}", err=True)
        return 1

    async with session:
        try:
            result = await find_root_containers(
                session,
                excluded=config.audit.excluded_namespaces,
                probe_command=config.audit.probe_command,
                request_timeout=config.audit.request_timeout,
            )
        except EnumerationError as exc:
            log.critical("fatal enumeration error", level=exc.level, error=str(exc))
            click.echo(f"Error finding containers: {exc}", err=True)
            return 1

    click.echo(render(result, config.report.output))

    if config.report.webhook_url:
        webhook = ReportWebhook(url=config.report.webhook_url)
        await webhook.send(build_payload(result))

    if config.report.metrics_file:
        try:
            write_metrics(config.report.metrics_file)
        except OSError as exc:
            log.warning("metrics file not written", path=config.report.metrics_file, error=str(exc))

    return 0
