"""Deployment of a built update site into a versioned bucket location.

The destination key is ``<project>/<releases|snapshots>/<version>``. The
previous contents at that location are removed before the local
``repository`` directory is uploaded.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from .exceptions import BucketDoesNotExistError, DeployError
from .landing_page import LandingPageGenerator
from .models import UploadedObject
from .path import BucketPath
from .repository import BucketRepository, create_repository
from .sync import BucketSynchronizer, SyncResult
from .trie import BucketTrie, BucketTrieFactory

logger = logging.getLogger(__name__)

REPOSITORY_DIR = "repository"
SNAPSHOT_QUALIFIER = "-SNAPSHOT"
SNAPSHOT_DIR = "snapshots"
RELEASE_DIR = "releases"
LANDING_PAGE_NAME = "index.html"


def is_snapshot_version(version: Optional[str]) -> bool:
    """Check whether a version carries the "-SNAPSHOT" qualifier."""
    return version is not None and version.strip().endswith(SNAPSHOT_QUALIFIER)


@dataclass
class DeployOptions:
    """Settings for one deployment."""

    bucket: str
    """Bucket hosting the site"""

    project_name: str
    """Top-level directory of the site in the bucket"""

    version: str
    """Version being deployed"""

    output_directory: Path
    """Build output directory containing the repository directory"""

    deploy_snapshots: bool = True
    """Whether snapshot versions are deployed"""

    skip: bool = False
    """Skip the deployment entirely"""

    generate_landing_page: bool = False
    """Upload an index.html landing page into the site root"""

    @property
    def repository_directory(self) -> Path:
        """Local directory whose contents are uploaded."""
        return Path(self.output_directory) / REPOSITORY_DIR

    def destination(self) -> BucketPath:
        """Build the destination path for this deployment.

        Raises:
            DeployError: If the project name or version is missing
        """
        if self.project_name is None or not self.project_name.strip():
            raise DeployError("Project name has not been specified")
        if self.version is None or not self.version.strip():
            raise DeployError("Version has not been specified")
        qualifier = SNAPSHOT_DIR if is_snapshot_version(self.version) else RELEASE_DIR
        return (
            BucketPath()
            .append(self.project_name)
            .append(qualifier)
            .append(self.version.strip())
        )


class Deployer:
    """Runs deployments against a bucket."""

    def __init__(
        self,
        repository_factory: Callable[[str], BucketRepository] = create_repository,
        landing_page_generator_factory: Callable[
            [], LandingPageGenerator
        ] = LandingPageGenerator,
        trie_factory: Optional[BucketTrieFactory] = None,
        progress_callback: Optional[Callable[[UploadedObject], None]] = None,
    ):
        """Initialize the deployer.

        Args:
            repository_factory: Creates a repository for a bucket name
            landing_page_generator_factory: Creates a landing page generator
            trie_factory: Factory for the content trie
            progress_callback: Optional callback invoked after every upload
        """
        self.repository_factory = repository_factory
        self.landing_page_generator_factory = landing_page_generator_factory
        self.trie_factory = trie_factory or BucketTrieFactory()
        self.progress_callback = progress_callback
        self.last_result: Optional[SyncResult] = None

    def execute(self, options: DeployOptions) -> Optional[str]:
        """Deploy the repository directory.

        Args:
            options: Deployment settings

        Returns:
            Hosting URL of the deployed site, or None if skipped

        Raises:
            DeployError: If the deployment cannot be completed
        """
        if options.skip:
            logger.info("Skipping execution")
            return None
        if is_snapshot_version(options.version) and not options.deploy_snapshots:
            logger.info("Skipping deployment of SNAPSHOT version")
            return None

        try:
            repository = self.repository_factory(options.bucket)
        except BucketDoesNotExistError as e:
            raise DeployError("The specified bucket does not exist") from e

        destination = options.destination()

        synchronizer = BucketSynchronizer(repository, self.progress_callback)
        result = synchronizer.synchronize(options.repository_directory, destination)
        self.last_result = result

        content = result.to_trie(self.trie_factory)
        logger.debug("Uploaded content:")
        content.log()

        if options.generate_landing_page:
            self._upload_landing_page(repository, options, destination, content)

        url = repository.get_hosting_url(destination.as_string())
        logger.info("Upload complete: %s", url)
        return url

    def _upload_landing_page(
        self,
        repository: BucketRepository,
        options: DeployOptions,
        destination: BucketPath,
        content: BucketTrie,
    ) -> None:
        landing_page_destination = BucketPath(destination).append(LANDING_PAGE_NAME)
        try:
            generator = self.landing_page_generator_factory()
            index = generator.generate(
                options.bucket, options.project_name, content, datetime.now()
            )
        except OSError as e:
            raise DeployError("Unable to generate landing page") from e

        try:
            repository.upload_file(index, landing_page_destination)
        finally:
            index.unlink(missing_ok=True)
