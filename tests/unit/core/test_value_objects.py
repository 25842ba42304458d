"""
Unit tests for shared value objects.
"""
import pytest

from core.domain.exceptions import InvalidHistoryStatusError, ValidationFailure
from core.domain.value_objects import Email, Pagination, UpdateStatus, ValidationErrorType


class TestEmail:
    def test_valid_email(self):
        assert str(Email("buyer@example.com")) == "buyer@example.com"

    @pytest.mark.parametrize("value", ["", "buyer.example.com"])
    def test_invalid_email(self, value):
        with pytest.raises(ValidationFailure) as exc_info:
            Email(value)
        assert exc_info.value.code == "INVALID_EMAIL"


class TestPagination:
    """Tests for Pagination."""

    def test_pages_round_up(self):
        pagination = Pagination.of(page=2, limit=50, total=101)

        assert pagination.pages == 3
        assert pagination.offset == 50

    def test_empty_listing_has_no_pages(self):
        assert Pagination.of(page=1, limit=50, total=0).pages == 0

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (-1, 10)])
    def test_rejects_non_positive_values(self, page, limit):
        with pytest.raises(ValidationFailure):
            Pagination.of(page=page, limit=limit, total=10)


class TestUpdateStatus:
    @pytest.mark.parametrize("value", ["completed", "failed"])
    def test_closing_statuses(self, value):
        assert UpdateStatus.closing(value).value == value

    @pytest.mark.parametrize("value", ["started", "cancelled", ""])
    def test_other_statuses_cannot_close(self, value):
        with pytest.raises(InvalidHistoryStatusError):
            UpdateStatus.closing(value)


def test_validation_error_type_values_match_client_contract():
    assert {t.value for t in ValidationErrorType} == {
        "invalid_key",
        "machine_mismatch",
        "max_devices_reached",
        "inactive",
        "expired",
    }
