"""DynamoDB repository for submitted orders.

Following the service convention, expected storage failures are logged and
reported through simple return values (None/False) rather than exceptions.
"""

import logging

from botocore.exceptions import ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

from catering_pricing_service.models.order_models import OrderSubmission

logger = logging.getLogger(__name__)


class OrderSubmissionRepository:
    """Persists orders with their authoritative totals.

    Manages order records in DynamoDB with order_number as partition key.
    """

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        """Initialize repository.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_name: Name of the DynamoDB table
        """
        self.dynamodb = dynamodb_resource
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)

    def save_submission(self, submission: OrderSubmission) -> bool:
        """Store a new order submission.

        Order numbers are never overwritten; saving an order number that
        already exists fails.

        Args:
            submission: Order and totals to store

        Returns:
            bool: True if the order was stored, False otherwise
        """
        try:
            # Fail instead of overwriting an existing order number
            self.table.put_item(
                Item=submission.to_dynamodb_item(),
                ConditionExpression="attribute_not_exists(order_number)",
            )
            return True

        except ClientError as e:
            logger.error(f"Failed to save order {submission.order_number}: {e}")
            return False

    def get_submission(self, order_number: str) -> OrderSubmission | None:
        """Retrieve a stored order by number.

        Args:
            order_number: Order number

        Returns:
            OrderSubmission if found, None otherwise
        """
        try:
            # order_number is the partition key
            response = self.table.get_item(Key={"order_number": order_number})

            if "Item" not in response:
                return None

            return OrderSubmission.from_dynamodb_item(response["Item"])

        except ClientError as e:
            logger.error(f"Failed to get order {order_number}: {e}")
            return None
