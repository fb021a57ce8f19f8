"""Unit tests for OrderSubmissionRepository."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from catering_pricing_service.models.menu_models import Location
from catering_pricing_service.models.order_models import OrderSubmission, OrderTotals, TotalsMode
from catering_pricing_service.repositories.order_repository import OrderSubmissionRepository


@pytest.mark.unit
class TestOrderSubmissionRepository:
    """Test suite for OrderSubmissionRepository."""

    @pytest.fixture
    def mock_dynamodb(self) -> MagicMock:
        """Create a mock DynamoDB resource."""
        return MagicMock()

    @pytest.fixture
    def repository(self, mock_dynamodb: MagicMock) -> OrderSubmissionRepository:
        """Create a repository with mocked DynamoDB."""
        return OrderSubmissionRepository(dynamodb_resource=mock_dynamodb, table_name="test-orders")

    @pytest.fixture
    def submission(self) -> OrderSubmission:
        """Create a sample submission."""
        return OrderSubmission(
            order_number="AGH-2025-ABCDEF12",
            created_at=datetime(2025, 6, 1, 9, 30, tzinfo=UTC),
            totals=OrderTotals(
                location=Location.MYKONOS,
                mode=TotalsMode.VAT_INCLUSIVE,
                lines=[],
                subtotal_minor_units=0,
                delivery_fee_minor_units=15000,
                vat_rate=Decimal("0.13"),
                vat_minor_units=1950,
                vat_included=True,
                total_minor_units=16950,
            ),
        )

    def test_repository_initialization(self, mock_dynamodb: MagicMock) -> None:
        """Test that repository initializes correctly."""
        repo = OrderSubmissionRepository(dynamodb_resource=mock_dynamodb, table_name="orders")

        assert repo.table_name == "orders"
        mock_dynamodb.Table.assert_called_once_with("orders")

    def test_save_submission_success(
        self,
        repository: OrderSubmissionRepository,
        mock_dynamodb: MagicMock,
        submission: OrderSubmission,
    ) -> None:
        """Test storing a new order."""
        result = repository.save_submission(submission)

        assert result is True
        put_item = mock_dynamodb.Table.return_value.put_item
        put_item.assert_called_once_with(
            Item=submission.to_dynamodb_item(),
            ConditionExpression="attribute_not_exists(order_number)",
        )

    def test_save_submission_dynamodb_error(
        self,
        repository: OrderSubmissionRepository,
        mock_dynamodb: MagicMock,
        submission: OrderSubmission,
    ) -> None:
        """Test that a failed write returns False."""
        mock_dynamodb.Table.return_value.put_item.side_effect = ClientError(
            {"Error": {"Code": "ConditionalCheckFailedException", "Message": "exists"}}, "PutItem"
        )

        assert repository.save_submission(submission) is False

    def test_get_submission_success(
        self,
        repository: OrderSubmissionRepository,
        mock_dynamodb: MagicMock,
        submission: OrderSubmission,
    ) -> None:
        """Test reading a stored order."""
        mock_dynamodb.Table.return_value.get_item.return_value = {
            "Item": submission.to_dynamodb_item()
        }

        result = repository.get_submission("AGH-2025-ABCDEF12")

        assert result == submission
        mock_dynamodb.Table.return_value.get_item.assert_called_once_with(
            Key={"order_number": "AGH-2025-ABCDEF12"}
        )

    def test_get_submission_not_found(
        self, repository: OrderSubmissionRepository, mock_dynamodb: MagicMock
    ) -> None:
        """Test reading a missing order."""
        mock_dynamodb.Table.return_value.get_item.return_value = {}

        assert repository.get_submission("AGH-2025-MISSING0") is None

    def test_get_submission_dynamodb_error(
        self, repository: OrderSubmissionRepository, mock_dynamodb: MagicMock
    ) -> None:
        """Test that DynamoDB errors return None."""
        mock_dynamodb.Table.return_value.get_item.side_effect = ClientError(
            {"Error": {"Code": "InternalServerError", "Message": "Server error"}}, "GetItem"
        )

        assert repository.get_submission("AGH-2025-ABCDEF12") is None
