"""Routing of feed webhooks to item operations.

There is no HTTP server here; a web layer parses the webhook body and calls
:func:`handle_webhook` with its fields.
"""

import logging
from typing import Any, Optional

from banksync.domain.entities import ItemStatus
from banksync.domain.errors import NotFoundError, external_item_not_found
from banksync.domain.item import ItemService
from banksync.domain.transaction_sync import TransactionSyncResult

logger = logging.getLogger(__name__)

TRANSACTIONS_WEBHOOK = "TRANSACTIONS"
ITEM_WEBHOOK = "ITEM"

SYNC_CODES = frozenset(
    {
        "SYNC_UPDATES_AVAILABLE",
        "DEFAULT_UPDATE",
        "INITIAL_UPDATE",
        "HISTORICAL_UPDATE",
        "TRANSACTIONS_REMOVED",
    }
)

ITEM_STATUS_CODES = {
    "ERROR": ItemStatus.ERROR,
    "PENDING_EXPIRATION": ItemStatus.PENDING_EXPIRATION,
    "PENDING_DISCONNECT": ItemStatus.PENDING_DISCONNECT,
    "LOGIN_REPAIRED": ItemStatus.ACTIVE,
}


def handle_webhook(
    item_service: ItemService,
    webhook_type: str,
    webhook_code: str,
    external_item_id: str,
    error: Optional[dict[str, Any]] = None,
    reason: Optional[str] = None,
) -> Optional[TransactionSyncResult]:
    """Dispatch a feed webhook.

    Args:
        item_service: ItemService used to sync or update the item
        webhook_type: Webhook type (e.g. "TRANSACTIONS", "ITEM")
        webhook_code: Webhook code (e.g. "SYNC_UPDATES_AVAILABLE")
        external_item_id: Item ID assigned by the feed
        error: Optional error payload sent with ITEM webhooks
        reason: Optional reason sent with PENDING_DISCONNECT

    Returns:
        The sync result when the webhook triggered a sync, otherwise None

    Raises:
        NotFoundError: If a sync webhook names an unknown item
    """
    webhook_type = webhook_type.upper()
    webhook_code = webhook_code.upper()

    if webhook_type == TRANSACTIONS_WEBHOOK and webhook_code in SYNC_CODES:
        item = item_service.find_by_external_id(external_item_id)
        if item is None:
            raise NotFoundError(external_item_not_found(external_item_id))
        logger.info("Webhook %s/%s: syncing item %d", webhook_type, webhook_code, item.id)
        return item_service.sync_item(item.id)

    if webhook_type == ITEM_WEBHOOK and webhook_code in ITEM_STATUS_CODES:
        item = item_service.find_by_external_id(external_item_id)
        if item is None:
            logger.warning(
                "Webhook %s/%s for unknown item %s ignored",
                webhook_type,
                webhook_code,
                external_item_id,
            )
            return None
        if error:
            logger.error("Item %s reported error: %s", external_item_id, error)
        if reason:
            logger.info("Item %s reason: %s", external_item_id, reason)
        item_service.set_status(item.id, ITEM_STATUS_CODES[webhook_code])
        return None

    logger.info("Unhandled webhook %s/%s for item %s", webhook_type, webhook_code, external_item_id)
    return None
