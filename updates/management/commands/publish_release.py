"""
Django management command to register an uploaded disk image as a release.

The file must already be in UPLOAD_DIR; its size and SHA-256 checksum
are computed here.
"""

from pathlib import Path

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.domain.exceptions import DomainException
from core.domain.value_objects import ReleaseType
from updates.application.commands.create_release import CreateReleaseCommand
from updates.application.handlers.create_release_handler import CreateReleaseHandler
from updates.domain.versioning import (
    compare_versions,
    generate_file_checksum,
    version_to_build_number,
)
from updates.infrastructure.repositories.django_release_repository import (
    DjangoReleaseRepository,
)


class Command(BaseCommand):
    """Command to publish a release."""

    help = "Publish an uploaded artifact as a new release"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("version", type=str, help="Release version, e.g. 1.2.3")
        parser.add_argument("filename", type=str, help="Artifact filename inside UPLOAD_DIR")
        parser.add_argument(
            "--build-number",
            type=int,
            default=None,
            help="Build number (default: derived from the version)",
        )
        parser.add_argument(
            "--release-type",
            type=str,
            default=ReleaseType.NORMAL.value,
            choices=[t.value for t in ReleaseType],
            help="Release type (default: normal)",
        )
        parser.add_argument(
            "--notes",
            type=str,
            default=None,
            help="Release notes",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Mark the release as a forced update",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        version = options["version"]
        filename = options["filename"]

        path = Path(settings.UPLOAD_DIR) / filename
        if Path(filename).name != filename or not path.is_file():
            raise CommandError(f"Artifact not found in {settings.UPLOAD_DIR}: {filename}")

        repository = DjangoReleaseRepository()
        try:
            build_number = options["build_number"]
            if build_number is None:
                build_number = version_to_build_number(version)

            latest = async_to_sync(repository.find_latest)()
            if latest is not None and compare_versions(version, latest.version) <= 0:
                self.stdout.write(
                    self.style.WARNING(
                        f"Version {version} is not newer than the latest release {latest.version}"
                    )
                )

            self.stdout.write(f"Computing checksum for {filename}...")
            with path.open("rb") as artifact:
                checksum = generate_file_checksum(artifact)

            release = async_to_sync(CreateReleaseHandler(release_repository=repository).handle)(
                CreateReleaseCommand(
                    version=version,
                    build_number=build_number,
                    release_type=options["release_type"],
                    filename=filename,
                    file_size=path.stat().st_size,
                    checksum=checksum,
                    release_notes=options["notes"],
                    force_update=options["force"],
                )
            )
        except DomainException as e:
            raise CommandError(e.message) from e

        self.stdout.write(
            self.style.SUCCESS(f"Published {release.version} (build {release.build_number})")
        )
        self.stdout.write(f"  Size: {release.file_size} bytes")
        self.stdout.write(f"  SHA-256: {release.checksum}")
