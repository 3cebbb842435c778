"""Command-line interface for s3-glacier-uploader.

Uploads one large file to S3 as a multipart upload finalized under the
DEEP_ARCHIVE storage class, and checks the resulting ETag.
"""

from __future__ import annotations

import contextlib
import logging
import sys
from pathlib import Path
from typing import Any

import click

from glacier_uploader.core.config import DEFAULT_REGION, UploadConfig, storage_settings_from_env
from glacier_uploader.core.errors import GlacierUploadError
from glacier_uploader.storage import MultipartUpload
from glacier_uploader.upload import UploadProgress, upload_file

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """Configure logging for the glacier_uploader package.

    Args:
        verbose: Show INFO messages on stdout instead of warnings only.
        log_file: Optional path of a log file receiving INFO and above.
    """
    package_logger = logging.getLogger("glacier_uploader")
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.INFO)
    package_logger.propagate = False

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    stdout_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    package_logger.addHandler(stdout_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(file_handler)


@click.command()
@click.version_option(package_name="s3-glacier-uploader")
@click.option(
    "--bucket",
    required=True,
    envvar="GLACIER_UPLOADER_BUCKET",
    help="Target S3 bucket.",
)
@click.option(
    "--region",
    default=DEFAULT_REGION,
    show_default=True,
    help="AWS region of the bucket.",
)
@click.option(
    "--upload-id",
    default="",
    help="Multipart upload ID to resume (not supported yet).",
)
@click.option(
    "--endpoint-url",
    default=None,
    envvar="GLACIER_UPLOADER_S3_ENDPOINT",
    help="Custom S3 endpoint (MinIO, LocalStack, etc.).",
)
@click.option("--no-progress", is_flag=True, help="Disable the progress bar.")
@click.option("--verbose", "-v", is_flag=True, help="Show informational log messages.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write log messages to this file.",
)
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
def cli(
    bucket: str,
    region: str,
    upload_id: str,
    endpoint_url: str | None,
    no_progress: bool,
    verbose: bool,
    log_file: Path | None,
    file: Path,
) -> None:
    """Upload FILE to S3 Glacier Deep Archive as a multipart upload."""
    setup_logging(verbose=verbose, log_file=log_file)

    env_settings = storage_settings_from_env()
    click.echo(f"File to upload: {file}")

    try:
        config = UploadConfig(
            bucket=bucket,
            file_path=file,
            region=region,
            upload_id=upload_id,
            endpoint_url=endpoint_url or env_settings["endpoint_url"],
            access_key=env_settings["access_key"],
            secret_key=env_settings["secret_key"],
        )

        with contextlib.ExitStack() as stack:
            bars: list[Any] = []

            def on_started(upload: MultipartUpload, total_parts: int) -> None:
                click.echo(f"Upload ID: {upload.upload_id}")
                if not no_progress:
                    bars.append(stack.enter_context(
                        click.progressbar(length=total_parts, label="Uploading parts")
                    ))

            def on_progress(progress: UploadProgress) -> None:
                if bars:
                    bars[0].update(1)

            result = upload_file(
                config,
                progress_callback=on_progress,
                on_started=on_started,
            )
    except GlacierUploadError as e:
        click.echo(str(e))
        sys.exit(1)

    click.echo("Success!")
    if result.etags_match:
        click.echo("Etags match!")
    else:
        click.echo("Etags don't match!")
        click.echo(f"  AWS:  {result.remote_etag}")
        click.echo(f"  Ours: {result.local_etag}")

    click.echo(result.location)


def main() -> None:
    """Entry point for the CLI."""
    cli()
