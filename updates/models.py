from updates.infrastructure.models import Release, UpdateHistory  # noqa: F401
