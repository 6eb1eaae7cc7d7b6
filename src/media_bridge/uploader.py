from __future__ import annotations

import logging
from typing import Optional

from media_bridge._exceptions import TRANSPORT_ERRORS, InvalidInputError, classify_error
from media_bridge.providers import BaseMediaService
from media_bridge.types import Asset, AssetHandle

__all__ = ["AssetUploader", "validate_asset"]


def validate_asset(asset: Asset) -> None:
    """Reject anything that is not a video before it reaches the network."""
    if not asset.is_video:
        raise InvalidInputError(
            f"{asset.display_name!r} has media type {asset.mime_type!r}; expected video/*"
        )


class AssetUploader:
    """Submits a local asset to the remote store. Never retries."""

    def __init__(
        self,
        service: BaseMediaService,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.service = service
        self.logger = logger or logging.getLogger(__name__)

    async def submit(self, asset: Asset) -> AssetHandle:
        """
        Upload ``asset`` and return its handle once receipt is acknowledged.

        The handle is usually still PENDING; see AssetReadinessPoller.

        Raises:
            InvalidInputError: The asset is not a video; nothing was sent.
            TransportError: The submission could not be made.
        """
        validate_asset(asset)
        try:
            return await self.service.submit_asset(
                asset.data, asset.mime_type, asset.display_name
            )
        except TRANSPORT_ERRORS as exc:
            raise classify_error(exc, self.logger) from exc
