from licenses.infrastructure.models import License, Payment  # noqa: F401
