"""
Django management command to mint a license key.
"""

from datetime import timedelta

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from core.domain.events import utc_now
from core.domain.exceptions import DomainException
from core.domain.value_objects import Plan
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.handlers.create_license_handler import CreateLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository


class Command(BaseCommand):
    """Command to create a license."""

    help = "Create a license key for a plan"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--plan",
            type=str,
            default=Plan.INDIVIDUAL.value,
            choices=[plan.value for plan in Plan],
            help="Plan (default: Individual)",
        )
        parser.add_argument(
            "--email",
            type=str,
            default=None,
            help="Customer email",
        )
        parser.add_argument(
            "--max-devices",
            type=int,
            default=None,
            help="Override the plan's device quota",
        )
        parser.add_argument(
            "--expires-in-days",
            type=int,
            default=None,
            help="Expire the license this many days from now (default: never)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        expires_at = None
        if options["expires_in_days"] is not None:
            expires_at = utc_now() + timedelta(days=options["expires_in_days"])

        handler = CreateLicenseHandler(license_repository=DjangoLicenseRepository())
        command = CreateLicenseCommand(
            plan=options["plan"],
            email=options["email"],
            max_devices=options["max_devices"],
            expires_at=expires_at,
        )
        try:
            license = async_to_sync(handler.handle)(command)
        except DomainException as e:
            raise CommandError(e.message) from e

        self.stdout.write(self.style.SUCCESS(f"Created license: {license.license_key}"))
        self.stdout.write(f"  Plan: {license.plan}")
        self.stdout.write(f"  Max devices: {license.max_devices}")
        if license.email:
            self.stdout.write(f"  Email: {license.email}")
        if license.expires_at:
            self.stdout.write(f"  Expires: {license.expires_at.isoformat()}")
