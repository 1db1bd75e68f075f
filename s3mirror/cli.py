"""CLI interface for s3mirror."""

import logging
from pathlib import Path
from typing import Any, Optional

import click
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from .client import S3Client
from .config import config
from .deploy import Deployer, DeployOptions
from .exceptions import (
    BucketDoesNotExistError,
    DeployError,
    S3MirrorAPIError,
    S3MirrorConfigError,
)
from .models import UploadedObject
from .output import OutputFormatter
from .path import BucketPath
from .repository import BucketRepository
from .sync import BucketSynchronizer, count_local_files
from .trie import BucketTrieFactory, ConsoleTriePrinter, build_trie
from .utils import as_directory_prefix, normalize_prefix

logger = logging.getLogger(__name__)


def _require_bucket(ctx: Any) -> str:
    """Get the bucket from the command line or config, exiting if unset."""
    out: OutputFormatter = ctx.obj["out"]
    try:
        return config.require_bucket(ctx.obj.get("bucket"))
    except S3MirrorConfigError as e:
        out.error(str(e))
        ctx.exit(1)


def _create_client(ctx: Any) -> S3Client:
    return S3Client(region=ctx.obj.get("region"), profile=ctx.obj.get("profile"))


def _create_repository(ctx: Any, bucket: str) -> BucketRepository:
    """Create a repository using the global client options.

    Raises:
        BucketDoesNotExistError: If the bucket does not exist
    """
    return BucketRepository(_create_client(ctx), bucket)


def _trie_factory(out: OutputFormatter) -> BucketTrieFactory:
    return BucketTrieFactory(system_printer=ConsoleTriePrinter(out.console))


@click.group()
@click.option(
    "--bucket", "-b", envvar="S3MIRROR_BUCKET", help="Destination S3 bucket"
)
@click.option("--region", help="AWS region (default: from config or environment)")
@click.option("--profile", help="Named AWS profile for credentials")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output in JSON format")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option()
@click.pass_context
def main(
    ctx: Any,
    bucket: Optional[str],
    region: Optional[str],
    profile: Optional[str],
    quiet: bool,
    json: bool,
    verbose: bool,
) -> None:
    """s3mirror - Mirror local directories into S3 buckets."""
    ctx.ensure_object(dict)
    ctx.obj["bucket"] = bucket
    ctx.obj["region"] = region
    ctx.obj["profile"] = profile
    ctx.obj["out"] = OutputFormatter(json_output=json, quiet=quiet)
    ctx.obj["verbose"] = verbose

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("s3mirror").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


@main.command()
@click.option(
    "--bucket",
    "-b",
    "default_bucket",
    prompt="Enter the default bucket",
    help="Bucket used when --bucket is not given",
)
@click.option("--region", "default_region", default=None, help="Default region")
@click.pass_context
def init(ctx: Any, default_bucket: str, default_region: Optional[str]) -> None:
    """Initialize s3mirror configuration.

    Stores the default bucket (and optionally region) in
    ~/.config/s3mirror/config. Credentials are not stored; they are taken
    from the usual AWS credential chain.
    """
    out: OutputFormatter = ctx.obj["out"]

    out.info(f"Checking bucket {default_bucket}...")
    client = S3Client(
        region=default_region or ctx.obj.get("region"),
        profile=ctx.obj.get("profile"),
    )
    try:
        if client.does_bucket_exist(default_bucket):
            out.success(f"✓ Bucket {default_bucket} is accessible")
        else:
            out.error(f"Bucket does not exist: {default_bucket}")
            if not click.confirm("Save bucket anyway?", default=False):
                out.warning("Configuration cancelled.")
                ctx.exit(1)
    except S3MirrorAPIError as e:
        out.error(f"Bucket check failed: {e}")
        if not click.confirm("Save bucket anyway?", default=False):
            out.warning("Configuration cancelled.")
            ctx.exit(1)

    config.save_default_bucket(default_bucket)
    if default_region:
        config.save_region(default_region)

    if out.json_output:
        out.output_json(
            {
                "bucket": default_bucket,
                "region": default_region,
                "config_file": str(config.get_config_path()),
            }
        )
    else:
        out.success(f"Configuration saved to {config.get_config_path()}")


@main.command()
@click.argument(
    "local_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.argument("dest")
@click.option(
    "--no-delete",
    is_flag=True,
    help="Keep existing objects under DEST instead of removing them first",
)
@click.option("--no-tree", is_flag=True, help="Do not print the uploaded tree")
@click.pass_context
def upload(
    ctx: Any, local_dir: Path, dest: str, no_delete: bool, no_tree: bool
) -> None:
    """Mirror LOCAL_DIR into the bucket under DEST.

    Everything below DEST is deleted first (unless --no-delete), then every
    file of LOCAL_DIR is uploaded with a public-read ACL.

    Examples:
        s3mirror -b my-bucket upload ./site project/releases/1.0
    """
    out: OutputFormatter = ctx.obj["out"]
    bucket = _require_bucket(ctx)

    try:
        destination = BucketPath(dest)
    except ValueError:
        out.error("Destination cannot be empty")
        ctx.exit(1)

    local_count = count_local_files(local_dir)
    out.info(f"Uploading {local_count} file(s) to s3://{bucket}/{destination}")

    try:
        repository = _create_repository(ctx, bucket)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=out.err_console,
            transient=True,
            disable=out.quiet or out.json_output,
        ) as progress:
            task_id = progress.add_task(f"Uploading to {destination}", total=None)

            def on_upload(uploaded: UploadedObject) -> None:
                progress.update(task_id, description=f"Uploaded {uploaded.key}")

            synchronizer = BucketSynchronizer(repository, on_upload)
            result = synchronizer.synchronize(
                local_dir, destination, delete_existing=not no_delete
            )
    except KeyboardInterrupt:
        out.warning("\nUpload cancelled by user")
        ctx.exit(130)
    except BucketDoesNotExistError as e:
        out.error(str(e))
        ctx.exit(1)
    except S3MirrorAPIError as e:
        out.error(f"API error: {e}")
        ctx.exit(1)

    if out.json_output:
        out.output_json(
            {
                "bucket": bucket,
                "destination": destination.as_string(),
                "url": result.url,
                "deleted": result.deleted,
                "uploaded": result.file_count,
                "total_bytes": result.total_bytes,
                "files": [
                    {"key": u.key, "url": u.url, "size": u.size}
                    for u in result.uploads
                ],
            }
        )
    else:
        if not no_tree and not out.quiet:
            result.to_trie(_trie_factory(out)).print()
        out.success(
            f"Uploaded {result.file_count} file(s) "
            f"({out.format_size(result.total_bytes)}) to {result.url or destination}"
        )

    if result.file_count < local_count:
        out.warning(
            f"Only {result.file_count} of {local_count} local file(s) were uploaded"
        )
        ctx.exit(1)


@main.command()
@click.argument(
    "output_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("--project-name", "-p", required=True, help="Project name")
@click.option("--version", "project_version", required=True, help="Project version")
@click.option(
    "--deploy-snapshots/--no-deploy-snapshots",
    default=True,
    help="Deploy -SNAPSHOT versions (default: yes)",
)
@click.option(
    "--landing-page", is_flag=True, help="Upload an index.html landing page"
)
@click.option("--skip", is_flag=True, help="Skip the deployment")
@click.pass_context
def deploy(
    ctx: Any,
    output_dir: Path,
    project_name: str,
    project_version: str,
    deploy_snapshots: bool,
    landing_page: bool,
    skip: bool,
) -> None:
    """Deploy OUTPUT_DIR/repository as a versioned update site.

    The site is stored under PROJECT/releases/VERSION, or
    PROJECT/snapshots/VERSION for -SNAPSHOT versions.
    """
    out: OutputFormatter = ctx.obj["out"]
    bucket = _require_bucket(ctx)

    options = DeployOptions(
        bucket=bucket,
        project_name=project_name,
        version=project_version,
        output_directory=output_dir,
        deploy_snapshots=deploy_snapshots,
        skip=skip,
        generate_landing_page=landing_page,
    )
    deployer = Deployer(
        repository_factory=lambda name: _create_repository(ctx, name),
        trie_factory=_trie_factory(out),
    )

    try:
        url = deployer.execute(options)
    except DeployError as e:
        out.error(str(e))
        ctx.exit(1)
    except S3MirrorAPIError as e:
        out.error(f"API error: {e}")
        ctx.exit(1)

    result = deployer.last_result
    if out.json_output:
        out.output_json(
            {
                "skipped": url is None,
                "url": url,
                "uploaded": result.file_count if result else 0,
            }
        )
    elif url is None:
        out.info("Deployment skipped")
    else:
        uploaded = result.file_count if result else 0
        out.success(f"Deployed {uploaded} file(s) to {url}")


@main.command()
@click.argument("prefix", default="", required=False)
@click.pass_context
def tree(ctx: Any, prefix: str) -> None:
    """Print the objects below PREFIX as a tree."""
    out: OutputFormatter = ctx.obj["out"]
    bucket = _require_bucket(ctx)
    scope = normalize_prefix(prefix) or None

    try:
        repository = _create_repository(ctx, bucket)
        keys = list(repository.list_keys(as_directory_prefix(prefix)))
    except BucketDoesNotExistError as e:
        out.error(str(e))
        ctx.exit(1)
    except S3MirrorAPIError as e:
        out.error(f"API error: {e}")
        ctx.exit(1)

    entries = [(key, repository.get_object_url(key)) for key in keys]

    if out.json_output:
        out.output_json(dict(entries))
        return

    content = build_trie(entries, prefix=scope, factory=_trie_factory(out))
    if content.is_empty():
        out.info(f"No objects found under s3://{bucket}/{scope or ''}")
        return
    content.print()
    out.info(f"{content.file_count()} object(s)")


@main.command()
@click.argument("prefix")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def rm(ctx: Any, prefix: str, yes: bool) -> None:
    """Delete every object below the directory PREFIX."""
    out: OutputFormatter = ctx.obj["out"]
    bucket = _require_bucket(ctx)

    directory_prefix = as_directory_prefix(prefix)
    if not directory_prefix:
        out.error("Prefix cannot be empty")
        ctx.exit(1)

    if (
        not yes
        and not out.quiet
        and not click.confirm(
            f"Are you sure you want to delete everything under "
            f"s3://{bucket}/{directory_prefix}?"
        )
    ):
        out.warning("Deletion cancelled.")
        return

    try:
        repository = _create_repository(ctx, bucket)
        deleted = repository.delete_directory(directory_prefix)
    except BucketDoesNotExistError as e:
        out.error(str(e))
        ctx.exit(1)
    except S3MirrorAPIError as e:
        out.error(f"API error: {e}")
        ctx.exit(1)

    if out.json_output:
        out.output_json({"prefix": directory_prefix, "deleted": deleted})
    else:
        out.success(f"Deleted {deleted} object(s) under {directory_prefix}")


@main.command()
@click.argument("key", default="", required=False)
@click.pass_context
def url(ctx: Any, key: str) -> None:
    """Show the static website hosting URL of KEY (or the bucket root)."""
    out: OutputFormatter = ctx.obj["out"]
    bucket = _require_bucket(ctx)

    try:
        repository = _create_repository(ctx, bucket)
        hosting_url = repository.get_hosting_url(normalize_prefix(key) or None)
    except BucketDoesNotExistError as e:
        out.error(str(e))
        ctx.exit(1)
    except S3MirrorAPIError as e:
        out.error(f"API error: {e}")
        ctx.exit(1)

    if out.json_output:
        out.output_json({"url": hosting_url})
    else:
        out.print(hosting_url)


if __name__ == "__main__":
    main()
