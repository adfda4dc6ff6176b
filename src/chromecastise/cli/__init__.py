"""Command line interface for chromecastise."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from chromecastise import __version__
from chromecastise.cli.exit_codes import ExitCode
from chromecastise.cli.output import echo_file_output, error_exit, format_summary
from chromecastise.config import (
    ChromecastiseConfig,
    configure_logging_from_cli,
    get_config,
)
from chromecastise.core.cancellation import CancellationToken, install_signal_handlers
from chromecastise.core.capabilities import ContainerFormat
from chromecastise.exceptions import CancelledError, ConfigError, ToolNotFoundError
from chromecastise.executor import FFmpegEncoder
from chromecastise.introspector import MediainfoInspector
from chromecastise.tools import find_tool, require_tool
from chromecastise.workflow import BatchDriver

logger = logging.getLogger(__name__)


def _resolve_target(mp4: bool, mkv: bool, default: ContainerFormat) -> ContainerFormat:
    """Pick the output container from the --mp4/--mkv flags."""
    if mp4:
        return ContainerFormat.MP4
    if mkv:
        return ContainerFormat.MKV
    return default


def _log_format(log_json: bool, quiet: bool) -> str | None:
    """Log format override from the flags; --quiet wins over --log-json."""
    if quiet:
        return "none"
    if log_json:
        return "json"
    return None


def _build_driver(
    config: ChromecastiseConfig,
    threads: int | None,
    dry_run: bool,
    token: CancellationToken,
    show_output: bool = False,
) -> BatchDriver:
    """Resolve external tools and wire up the batch driver.

    Raises:
        ToolNotFoundError: If mediainfo (or ffmpeg, unless dry-running) is missing.
    """
    mediainfo_path = require_tool("mediainfo", config.tools.mediainfo)
    if dry_run:
        ffmpeg_path: Path | str = find_tool("ffmpeg", config.tools.ffmpeg) or "ffmpeg"
    else:
        ffmpeg_path = require_tool("ffmpeg", config.tools.ffmpeg)

    inspector = MediainfoInspector(
        mediainfo_path, timeout=config.transcode.probe_timeout
    )
    encoder = FFmpegEncoder(ffmpeg_path, threads=threads)
    return BatchDriver(
        inspector,
        encoder,
        token=token,
        dry_run=dry_run,
        file_callback=echo_file_output if show_output else None,
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="chromecastise")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(path_type=Path),
)
@click.option("--mp4", is_flag=True, help="Convert to mp4 container format.")
@click.option("--mkv", is_flag=True, help="Convert to mkv container format.")
@click.option(
    "--suffix",
    default=None,
    help="Text appended to the output file name (default: _new).",
)
@click.option(
    "--threads",
    type=click.IntRange(min=1),
    default=None,
    help="Encoder threads (default: one per CPU).",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Inspect and plan only; do not run the encoder.",
)
@click.option(
    "--show-output",
    is_flag=True,
    help="Print the encoder output of each file as it finishes.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.chromecastise/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Also write logs to this file.",
)
@click.option("--log-json", is_flag=True, default=False, help="Use JSON log format.")
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Discard log output; the summary and fatal errors still print.",
)
def main(
    files: tuple[Path, ...],
    mp4: bool,
    mkv: bool,
    suffix: str | None,
    threads: int | None,
    dry_run: bool,
    show_output: bool,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
    quiet: bool,
) -> None:
    """Convert FILES into Chromecast-compatible video files.

    Streams that Chromecast already plays (H.264 video, AAC audio) are copied;
    everything else is re-encoded. Output is written next to each source as
    <name><suffix>.<mp4|mkv>.
    """
    if mp4 and mkv:
        raise click.UsageError("--mp4 and --mkv are mutually exclusive.")

    try:
        config = get_config(config_path)
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)

    target = _resolve_target(mp4, mkv, config.transcode.format)

    try:
        configure_logging_from_cli(
            config.logging,
            level=log_level,
            file=log_file,
            format=_log_format(log_json, quiet),
        )
    except ValueError as e:
        error_exit(f"Invalid logging configuration: {e}", ExitCode.CONFIG_ERROR)

    effective_suffix = suffix if suffix is not None else config.transcode.suffix
    effective_threads = threads if threads is not None else config.transcode.threads

    logger.debug(
        "chromecastise %s: files=%d target=%s suffix=%r threads=%s dry_run=%s",
        __version__,
        len(files),
        target.value,
        effective_suffix,
        effective_threads or "auto",
        dry_run,
    )

    token = CancellationToken()
    try:
        driver = _build_driver(
            config, effective_threads, dry_run, token, show_output=show_output
        )
    except ToolNotFoundError as e:
        error_exit(str(e), ExitCode.TOOL_NOT_AVAILABLE)

    restore_signals = install_signal_handlers(token)
    try:
        result = driver.run(files, target, effective_suffix)
    except CancelledError:
        click.echo(format_summary(driver.result), err=True)
        error_exit(
            "Interrupted; remaining files were not processed.", ExitCode.INTERRUPTED
        )
    finally:
        restore_signals()

    click.echo(format_summary(result))
