"""
Django implementation of PaymentRepository port.
"""
import uuid
from typing import List

from asgiref.sync import sync_to_async

from licenses.domain.payment import Payment
from licenses.infrastructure.models import Payment as PaymentModel
from licenses.ports.payment_repository import PaymentRepository


class DjangoPaymentRepository(PaymentRepository):
    """Django ORM implementation of PaymentRepository."""

    def _to_domain(self, model: PaymentModel) -> Payment:
        return Payment(
            id=model.id,
            license_id=model.license_id,
            email=model.email,
            amount=model.amount,
            currency=model.currency,
            provider=model.provider,
            transaction_id=model.transaction_id,
            plan=model.plan,
            status=model.status,
            created_at=model.created_at,
        )

    @sync_to_async
    def find_by_license(self, license_id: uuid.UUID) -> List[Payment]:
        models = PaymentModel.objects.filter(license_id=license_id).order_by("-created_at")
        return [self._to_domain(model) for model in models]
