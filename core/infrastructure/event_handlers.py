"""
Event handlers for domain events.

Side effects that do not belong to the publishing use case: the audit
log and the Prometheus business counters.
"""

import logging

from activations.domain.events import DeviceActivated, DeviceDeactivated, LicenseValidated
from core import metrics
from core.domain.events import DomainEvent, EventHandler
from licenses.domain.events import LicenseCreated, LicenseDeactivated
from updates.domain.events import (
    ArtifactDownloaded,
    ReleaseCreated,
    ReleaseDeactivated,
    UpdateChecked,
    UpdateStatusRecorded,
)

logger = logging.getLogger("audit")

ALL_EVENTS = (
    LicenseCreated,
    LicenseDeactivated,
    LicenseValidated,
    DeviceActivated,
    DeviceDeactivated,
    ReleaseCreated,
    ReleaseDeactivated,
    UpdateChecked,
    UpdateStatusRecorded,
    ArtifactDownloaded,
)


class AuditLogEventHandler(EventHandler):
    """Writes every domain event to the structured audit log."""

    async def handle(self, event: DomainEvent) -> None:
        payload = {
            key: str(value)
            for key, value in vars(event).items()
            if key not in ("event_id", "occurred_at", "aggregate_id", "event_type")
        }
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={**event.to_dict(), "payload": payload},
        )


class MetricsEventHandler(EventHandler):
    """Increments Prometheus business counters."""

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, LicenseCreated):
            metrics.licenses_created_total.labels(plan=event.plan).inc()
        elif isinstance(event, LicenseDeactivated):
            metrics.licenses_deactivated_total.inc()
        elif isinstance(event, LicenseValidated):
            metrics.license_validations_total.labels(outcome=event.outcome).inc()
        elif isinstance(event, DeviceActivated):
            metrics.devices_activated_total.inc()
        elif isinstance(event, DeviceDeactivated):
            metrics.devices_deactivated_total.inc()
        elif isinstance(event, ReleaseCreated):
            metrics.releases_created_total.labels(release_type=event.release_type).inc()
        elif isinstance(event, UpdateChecked):
            available = "true" if event.offered_version else "false"
            metrics.update_checks_total.labels(update_available=available).inc()
        elif isinstance(event, ArtifactDownloaded):
            metrics.update_downloads_total.inc()
        elif isinstance(event, UpdateStatusRecorded):
            metrics.update_history_closed_total.labels(status=event.status).inc()


audit_handler = AuditLogEventHandler()
metrics_handler = MetricsEventHandler()


def register_event_handlers(bus=None):
    """
    Subscribe the audit and metrics handlers to every domain event.

    Safe to call more than once; the bus ignores repeated subscriptions.
    """
    if bus is None:
        from core.infrastructure.events import event_bus as bus

    for event_type in ALL_EVENTS:
        bus.subscribe(event_type, audit_handler)
        bus.subscribe(event_type, metrics_handler)

    logging.getLogger(__name__).info("Event handlers registered")
